# /experiments/sanity_rollout.py
"""
Sanity rollouts for RunnerEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds
- Writes an episodes CSV for notebook analysis
- Optionally saves per-episode action sequences for later inspection

Usage examples (from repo root):
  # Both policies over 20 default seeds, frame_skip=4, save traces:
  python -m experiments.sanity_rollout --policies both --save-traces

  # Only heuristic, custom seeds:
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333

  # Quick random-only smoke with fewer steps:
  python -m experiments.sanity_rollout --policies random --steps 300 --out-dir /tmp/sanity
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import List, Tuple

import numpy as np

from tiny_runner.env.runner_env import RunnerEnv


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.randint(0, 2))
    return act

def tiny_heuristic_policy_init(jump_dx: float = 0.09):
    """
    Very small rule, looking only at the nearest obstacle (indices 4..6):
      - ground obstacle (bottom touches the ground band) closer than `jump_dx`: hold jump
      - flying obstacle: stay down and let it pass overhead
    """
    def act(obs: np.ndarray) -> int:
        dx, top, bottom = obs[4], obs[5], obs[6]
        on_ground = obs[2] > 0.5
        is_ground_block = bottom > 0.88
        if is_ground_block and dx < jump_dx:
            return 1
        # keep holding through the rise for full height
        if not on_ground and obs[1] < 0.0:
            return 1
        return 0
    return act


# ------------------------ Rollout core ------------------------

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    frame_skip: int,
                    steps_limit: int,
                    save_traces: bool,
                    out_dir: Path) -> Tuple[int, float, int, float, bool, bool]:
    """Returns: (ep_len, ret_sum, score, elapsed_s, terminated, truncated)."""
    env = RunnerEnv(frame_skip=frame_skip)

    if policy_name == "random":
        policy = random_policy_init(10_000 + seed)
    elif policy_name == "heuristic":
        policy = tiny_heuristic_policy_init()
    else:
        raise ValueError("Unknown policy")

    actions: List[int] = []
    ret_sum = 0.0
    ep_len = 0
    term = trunc = False
    info = {}

    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps_limit):
            a = policy(obs)
            actions.append(int(a))
            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            ep_len += 1
            if term or trunc:
                break
    finally:
        env.close()

    if save_traces:
        trace_dir = out_dir / "traces" / policy_name
        trace_dir.mkdir(parents=True, exist_ok=True)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))

    return ep_len, ret_sum, int(info.get("score", 0)), float(info.get("elapsed", 0.0)), bool(term), bool(trunc)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"])
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env may truncate earlier)")
    ap.add_argument("--out-dir", type=str, default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))

    episodes_csv = out_dir / "episodes.csv"
    header = ["policy_name", "seed", "frame_skip", "episode_len_decisions",
              "return_sum", "score", "elapsed_s", "terminated", "truncated"]

    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]
    print(f"Running policies={to_run} on {len(seeds)} seeds (frame_skip={args.frame_skip})")

    for policy_name in to_run:
        for seed in seeds:
            ep_len, ret_sum, score, elapsed, terminated, truncated = run_one_episode(
                policy_name=policy_name, seed=seed, frame_skip=args.frame_skip,
                steps_limit=args.steps, save_traces=args.save_traces, out_dir=out_dir,
            )
            write_episode_row(episodes_csv, header, [
                policy_name, seed, args.frame_skip, ep_len, f"{ret_sum:.1f}",
                score, f"{elapsed:.2f}", int(terminated), int(truncated),
            ])
            print(f"[{policy_name}] seed={seed}  len={ep_len}  score={score}  "
                  f"t={elapsed:.1f}s  ret={ret_sum:.1f}  term={terminated} trunc={truncated}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
