from __future__ import annotations

from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


from tradersim.config.rules import load_rules
from tradersim.sim.session import Session
from tradersim.sim.types import Action, Mode, Side


def main() -> None:
    session = Session(seed=1, rules=load_rules())
    action = Action(side=Side.LONG, size=0.3, leverage=5, stop_loss=0.02, take_profit=0.04, use_stop=True, use_take=False)

    session.play_day(action, Mode.TRADE, note="first trade")
    session.play_day(action, Mode.STUDY)
    session.play_day(action, Mode.REST)

    state = session.state
    print(f"seed={session.seed} day={state.day} equity={state.equity:.2f} regime={state.regime.value}")
    for line in reversed(state.log[:-1]):
        print(line)


if __name__ == "__main__":
    main()
