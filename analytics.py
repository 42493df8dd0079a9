from dataclasses import dataclass

import pandas as pd

from records import resolved_role
from schemas import ResumeRecord

TOP_ROLES = 10
NO_DATA = "No role data available"


@dataclass(frozen=True)
class RoleStat:
    name: str
    value: int
    percentage: float | None


def percentage(value: int, total: int) -> float | None:
    if not total:
        return None
    return value / total * 100


def format_percentage(value: int, total: int) -> str:
    pct = percentage(value, total)
    if pct is None:
        return NO_DATA
    return f"{pct:.1f}%"


def role_counts(eligible: list[ResumeRecord]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for record in eligible:
        role = resolved_role(record)
        counts[role] = counts.get(role, 0) + 1
    return counts


def role_stats(eligible: list[ResumeRecord], top_n: int = TOP_ROLES) -> list[RoleStat]:
    total = len(eligible)
    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(role_counts(eligible).items(), key=lambda item: item[1], reverse=True)
    return [RoleStat(name, value, percentage(value, total)) for name, value in ranked[:top_n]]


def role_stats_frame(stats: list[RoleStat], total: int) -> pd.DataFrame:
    df = pd.DataFrame(
        [{"Rank": f"#{i + 1}", "Role": s.name, "Count": s.value} for i, s in enumerate(stats)],
        columns=["Rank", "Role", "Count"],
    )
    df["Percentage"] = [format_percentage(s.value, total) for s in stats]
    return df


def summary_metrics(resumes: list[ResumeRecord], stats: list[RoleStat]) -> dict[str, int]:
    return {
        "total_resumes": len(resumes),
        "unique_roles": len(stats),
        "top_role_count": stats[0].value if stats else 0,
    }
