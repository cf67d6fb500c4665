"""What would a first week on 16:8 look like?

Drives the fasting state machine through seven days of a typical user
(one broken fast, one missed day) and prints the generated workout for
each programme day next to the streak and compliance figures.

Usage:
    python scripts/simulate_week.py
"""

import datetime
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fitcycle.catalog.exercise_catalog import BUILTIN_EXERCISES
from fitcycle.engine.exercise_selection import generate_daily_workout
from fitcycle.engine.fasting_cycle import FastingCycleStateMachine
from fitcycle.engine.progression import compute_progression_factors
from fitcycle.schemas.workout import ActivityLevel, Goal, UserAttributes

START = datetime.date(2026, 3, 2)

# day -> what the user does ("complete", "break", or "skip")
BEHAVIOUR = ["complete", "complete", "break", "complete", "skip", "complete", "complete"]


def at(day: datetime.date, hour: int, minute: int = 0) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time(hour, minute))


def run_day(machine: FastingCycleStateMachine, day: datetime.date, behaviour: str) -> None:
    machine.initialize_today_cycle(at(day, 0, 5))
    if behaviour == "skip":
        return
    machine.start_fasting(at(day, 0, 10))
    if behaviour == "break":
        machine.break_fast(at(day, 9, 30))
        return
    machine.start_eating(at(day, 12))
    machine.complete_cycle(at(day, 20))


if __name__ == "__main__":
    machine = FastingCycleStateMachine()
    attributes = UserAttributes(weight_kg=84, height_cm=178, activity_level=ActivityLevel.LIGHTLY_ACTIVE,
                                goal=Goal.LOSE_WEIGHT)

    print("=" * 72)
    print(f"{'day':>3}  {'date':<10}  {'cycle':<13}  {'streak':>6}  {'week %':>6}  {'min':>4}  {'kcal':>5}  focus")
    print("=" * 72)

    for offset, behaviour in enumerate(BEHAVIOUR):
        day = START + datetime.timedelta(days=offset)
        run_day(machine, day, behaviour)

        cycle = machine.get_cycle_for_date(day)
        compliance = machine.get_weekly_compliance(day)
        factors = compute_progression_factors(offset + 1, fasting_compliance=compliance)
        workout = generate_daily_workout(attributes.model_copy(update={"day_number": offset + 1}), BUILTIN_EXERCISES,
                                         factors=factors)

        print(f"{offset + 1:>3}  {day.isoformat():<10}  {cycle.state.value:<13}  "
              f"{machine.get_current_streak(day):>6}  {compliance:>6}  {workout.total_duration:>4}  "
              f"{workout.total_calories:>5}  {workout.focus_area}")

    # Roll into day 8 so the skipped day is archived as missed
    machine.initialize_today_cycle(at(START + datetime.timedelta(days=len(BEHAVIOUR)), 0, 1))
    print()
    print("History:")
    for cycle in machine.history_between(START, START + datetime.timedelta(days=7)):
        print(f"  {cycle.date}  {cycle.state.value}")
