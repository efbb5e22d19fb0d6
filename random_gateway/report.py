from .models import AggregateResult


def format_value(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_report(result: AggregateResult) -> str:
    """Plain-text body for a finished fan-out."""
    lines = [f"Result: {result.attempted} attempts & {result.succeeded} successful random values\n"]
    if result.failed_reasons:
        lines.append("Failed to send to: \n" + "\n".join(result.failed_reasons) + "\n")
    if result.values:
        lines.append("random values:\t" + ",".join(format_value(v) for v in result.values) + "\n")
    return "".join(lines)
