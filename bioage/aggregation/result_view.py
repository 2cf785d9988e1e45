"""Display-ready view of an analysis result.

Presentation layers render one panel per clock; a failed clock becomes an
inline error panel and never a workflow-level failure.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from bioage.domain import AnalysisResult, ClockFailure, ClockSuccess, ResultShape


@dataclass(frozen=True)
class ResultPanel:
    """One clock card.

    Attributes:
        clock_name: Clock identifier.
        succeeded: Whether the clock produced a prediction.
        predicted_age: Predicted age rounded to one decimal, None on failure.
        std_predicted_age: Standard deviation rounded to one decimal, when known.
        num_samples: Number of samples scored, when known.
        error: Inline error text on failure.
    """

    clock_name: str
    succeeded: bool
    predicted_age: float | None = None
    std_predicted_age: float | None = None
    num_samples: int | None = None
    error: str | None = None

    def panel_to_dict(self) -> dict[str, object]:
        return asdict(self)


def result_build_panels(result: AnalysisResult) -> tuple[ResultPanel, ...]:
    """Build one panel per clock, ordered by clock name.

    Args:
        result: Aggregated analysis result.

    Returns:
        tuple[ResultPanel, ...]: Panels in deterministic display order.
    """

    panels: list[ResultPanel] = []
    for clock_name in sorted(result.clocks):
        outcome = result.clocks[clock_name]
        if isinstance(outcome, ClockFailure):
            panels.append(ResultPanel(clock_name=clock_name, succeeded=False, error=outcome.error))
            continue
        panels.append(_result_build_success_panel(clock_name, outcome))
    return tuple(panels)


def _result_build_success_panel(clock_name: str, outcome: ClockSuccess) -> ResultPanel:
    std_predicted_age = None
    if outcome.std_predicted_age is not None:
        std_predicted_age = round(outcome.std_predicted_age, 1)
    return ResultPanel(
        clock_name=clock_name,
        succeeded=True,
        predicted_age=round(outcome.predicted_age, 1),
        std_predicted_age=std_predicted_age,
        num_samples=outcome.num_samples,
    )


def result_format_age(value: float) -> str:
    """Format an age without a trailing `.0` for whole numbers."""

    rounded_value = round(value, 1)
    if rounded_value == int(rounded_value):
        return str(int(rounded_value))
    return f"{rounded_value:.1f}"


def result_format_text(result: AnalysisResult) -> str:
    """Render a result as plain text for terminal output.

    Args:
        result: Aggregated analysis result.

    Returns:
        str: Multi-line text, one line per clock for multi-clock results.
    """

    single_value = result.result_single_value()
    if result.shape is ResultShape.SINGLE_VALUE and single_value is not None:
        return f"Your Biological Age: {result_format_age(single_value)} years"

    lines: list[str] = []
    for panel in result_build_panels(result):
        if not panel.succeeded:
            lines.append(f"{panel.clock_name}: error: {panel.error}")
            continue
        line = f"{panel.clock_name}: {result_format_age(panel.predicted_age)} years"
        if panel.std_predicted_age is not None:
            line += f" (± {panel.std_predicted_age:.1f})"
        if panel.num_samples is not None:
            line += f", {panel.num_samples} samples"
        lines.append(line)

    if result.total_sites_used is not None:
        lines.append(f"Sites used: {result.total_sites_used}")
    if result.config is not None:
        normalized_label = "yes" if result.config.normalize_data else "no"
        lines.append(f"Imputation: {result.config.imputation_strategy}, normalized: {normalized_label}")
    return "\n".join(lines)
