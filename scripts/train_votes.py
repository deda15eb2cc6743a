#!/usr/bin/env python3
"""Train the vote perceptron until it is perfect on the test split, then predict once."""
from __future__ import annotations

import argparse

from vote_perceptron.data import REAL_WORLD_VOTES, build_dataset
from vote_perceptron.inference import predict
from vote_perceptron.training import RetryConfig, TrainingConfig, train_until_success
from vote_perceptron.utils import resolve_device


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--epochs", type=int, default=10)
    p.add_argument("--lr", type=float, default=0.05)
    p.add_argument(
        "--max-attempts", type=int, default=100, help="Attempt budget, 0 retries forever"
    )
    p.add_argument("--timeout", type=float, default=None, help="Wall-clock budget in seconds")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--device", type=str, default=None)
    p.add_argument(
        "--votes",
        type=float,
        nargs=2,
        default=list(REAL_WORLD_VOTES),
        metavar=("A", "B"),
        help="Vote row to classify after training",
    )
    p.add_argument("--log-wandb", action="store_true")
    p.add_argument("--quiet", action="store_true", help="Hide per-epoch progress")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    device = resolve_device(args.device)
    if args.log_wandb:
        import wandb

        wandb.init(project="vote-perceptron", config=vars(args))
    dataset = build_dataset(device)
    model = train_until_success(
        dataset,
        config=TrainingConfig(epochs=args.epochs, learning_rate=args.lr),
        retry=RetryConfig(max_attempts=args.max_attempts or None, timeout=args.timeout),
        device=device,
        seed=args.seed,
        verbose=not args.quiet,
        log_wandb=args.log_wandb,
    )
    votes = [int(v) if float(v).is_integer() else v for v in args.votes]
    result = predict(model, votes)
    print(f"real_life_votes: {votes}")
    print(f"neural_network_prediction_result: {result}")


if __name__ == "__main__":
    main()
