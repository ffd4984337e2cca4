#!/usr/bin/env python3
"""Composite actor example.

This demonstrates composing actors into a checkout pipeline:

* validate inputs with `type`, `must` and `inclusion`
* play actors in order against one shared result
* roll back the steps already played when a later one fails

Log output follows `SERVICE_ACTOR_LOG_LEVEL` / `SERVICE_ACTOR_LOG_FORMAT`
(or a local `.env`).
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from service_actor import Actor, Play, configure_logging

STOCK = {"book": 3, "lamp": 1}
PROVIDERS = ["PayPal", "Stripe"]


class ReserveStock(Actor):
    inputs = {
        "item": {"type": str, "inclusion": list(STOCK)},
        "quantity": {"type": int, "must": {"be_positive": lambda quantity: quantity > 0}},
    }

    def execute(self) -> None:
        if STOCK[self.item] < self.quantity:
            self.fail(error=f"Only {STOCK[self.item]} {self.item} left")
        STOCK[self.item] -= self.quantity

    def rollback(self) -> None:
        STOCK[self.item] += self.quantity


class ChargeCard(Actor):
    inputs = {"provider": {"type": str, "inclusion": PROVIDERS, "default": "Stripe"}}
    outputs = {"receipt": {"type": str}}

    def execute(self) -> None:
        if self.result["declined"]:
            self.fail(error=f"{self.provider} declined the payment")
        self.receipt = f"{self.provider}-{self.result['item']}-{self.result['quantity']}"


class SendReceipt(Actor):
    inputs = {"receipt": {"type": str}, "email": {"type": str, "allow_nil": True}}
    outputs = {"sent_to": {"type": str, "allow_nil": True}}

    def execute(self) -> None:
        self.sent_to = self.email


class Checkout(Actor):
    play = [
        ReserveStock,
        ChargeCard,
        Play(SendReceipt, when=lambda result: result["email"]),
    ]


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a checkout pipeline (actor example).")
    parser.add_argument("--item", required=True, help=f"One of: {', '.join(STOCK)}")
    parser.add_argument("--quantity", type=int, default=1, help="How many to buy")
    parser.add_argument("--provider", default=None, help=f"One of: {', '.join(PROVIDERS)}")
    parser.add_argument("--email", default=None, help="Where to send the receipt (optional)")
    parser.add_argument(
        "--declined",
        action="store_true",
        help="Simulate a declined payment to see the stock reservation rolled back",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging()

    data = {"item": args.item, "quantity": args.quantity, "declined": args.declined}
    if args.provider is not None:
        data["provider"] = args.provider
    if args.email is not None:
        data["email"] = args.email

    result = Checkout.result(data)
    if result.is_failure():
        print(f"Checkout failed: {result['error']}")
        print(f"Stock: {STOCK}")
        return 1

    print(f"Receipt: {result['receipt']}")
    if result["sent_to"]:
        print(f"Sent to: {result['sent_to']}")
    print(f"Stock: {STOCK}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
