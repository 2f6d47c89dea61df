from __future__ import annotations

import json
from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


from tradersim.config.rules import load_rules
from tradersim.players.rule_player import RulePlayer
from tradersim.sim.plotting import save_drawdown_plot, save_equity_plot
from tradersim.sim.session import Session


def main() -> None:
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else 7
    days = int(sys.argv[2]) if len(sys.argv) > 2 else 365

    session = Session(seed=seed, rules=load_rules())
    result = session.run(RulePlayer(), days=days)

    out_dir = Path("artifacts/rule_player")
    out_dir.mkdir(parents=True, exist_ok=True)

    result["history"].to_csv(out_dir / "history.csv")
    with (out_dir / "metrics.json").open("w", encoding="utf-8") as fp:
        json.dump(result["metrics"], fp, ensure_ascii=False, indent=2)
    session.save_json(out_dir / "snapshot.json")

    save_equity_plot(result["history"], out_dir / "equity.png")
    save_drawdown_plot(result["history"], out_dir / "drawdown.png")

    metrics = result["metrics"]
    print(
        f"seed={seed}, day={metrics['day']}, start={metrics['start_equity']:.2f}, end={metrics['end_equity']:.2f}, "
        f"return={metrics['total_return_pct']:.2f}%, mdd={metrics['max_drawdown_pct']:.2f}%, "
        f"trades={metrics['num_trades']}, win_rate={metrics['win_rate']:.0%}, status={metrics['status']}"
    )
    for name in ("history.csv", "metrics.json", "snapshot.json", "equity.png", "drawdown.png"):
        print(f"saved: {out_dir / name}")


if __name__ == "__main__":
    main()
