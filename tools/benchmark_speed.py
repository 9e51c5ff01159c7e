"""
Performance Benchmark
=====================

Measures headless tick throughput for performance tuning.

Usage:
    python -m tools.benchmark_speed [--steps S] [--jump-prob P]
"""

from __future__ import annotations

import argparse
import sys
import time

import numpy as np

from flappy_game.flappy_core.config_loader import load_config
from flappy_game.flappy_core.game import CoreGame, InputEvent
from flappy_game.flappy_core.env_gym import FlappyEnv
from flappy_game.flappy_core.render_solid import ArraySurface


def benchmark_core_game(
    num_steps: int = 10000,
    seed: int = 42,
    jump_prob: float = 0.02,
    draw: bool = False
) -> dict:
    """
    Benchmark raw CoreGame ticks without Gym overhead.

    Args:
        num_steps: Number of ticks.
        seed: Random seed.
        jump_prob: Chance of a jump on each tick.
        draw: Also rasterize every frame into an ArraySurface.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    game = CoreGame(config=config, seed=seed)
    surface = ArraySurface(config) if draw else None
    rng = np.random.default_rng(seed)

    game.reset(seed=seed)
    games_over = 0
    start = time.perf_counter()

    for _ in range(num_steps):
        if rng.random() < jump_prob:
            game.handle_input(InputEvent.JUMP)
        result = game.frame(surface) if surface is not None else game.tick()
        if result.game_over:
            games_over += 1
            game.reset()

    elapsed = time.perf_counter() - start

    return {
        "mode": "core_game+draw" if draw else "core_game",
        "num_steps": num_steps,
        "episodes": games_over,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def benchmark_single_env(
    num_steps: int = 10000,
    seed: int = 42,
    jump_prob: float = 0.02
) -> dict:
    """
    Benchmark single environment performance.

    Args:
        num_steps: Number of steps to run.
        seed: Random seed.
        jump_prob: Chance of choosing the jump action.

    Returns:
        Dict with timing results.
    """
    env = FlappyEnv()
    rng = np.random.default_rng(seed)

    env.reset(seed=seed)
    episodes = 0
    start = time.perf_counter()

    for _ in range(num_steps):
        action = int(rng.random() < jump_prob)
        _, _, terminated, truncated, _ = env.step(action)
        if terminated or truncated:
            episodes += 1
            env.reset()

    elapsed = time.perf_counter() - start
    env.close()

    return {
        "mode": "gym_env",
        "num_steps": num_steps,
        "episodes": episodes,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def run_all_benchmarks(steps: int = 10000, jump_prob: float = 0.02) -> list:
    """Run comprehensive benchmarks."""
    results = [
        benchmark_core_game(num_steps=steps, jump_prob=jump_prob),
        benchmark_core_game(num_steps=steps, jump_prob=jump_prob, draw=True),
        benchmark_single_env(num_steps=steps, jump_prob=jump_prob),
    ]

    print("=" * 60)
    print("FLAPPY PERFORMANCE BENCHMARK")
    print("=" * 60)
    print()
    print(f"{'Mode':<20} {'Episodes':>9} {'Steps/s':>12} {'ms/step':>10}")
    print("-" * 55)

    for r in results:
        print(
            f"{r['mode']:<20} {r['episodes']:>9} "
            f"{r['steps_per_second']:>12.1f} {r['ms_per_step']:>10.4f}"
        )

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark Flappy tick throughput")
    parser.add_argument("--steps", type=int, default=10000, help="Ticks per benchmark")
    parser.add_argument("--jump-prob", type=float, default=0.02, help="Per-tick jump chance")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer steps)")

    args = parser.parse_args()

    steps = 1000 if args.quick else args.steps

    run_all_benchmarks(steps=steps, jump_prob=args.jump_prob)

    return 0


if __name__ == "__main__":
    sys.exit(main())
