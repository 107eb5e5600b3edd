"""Health score classification."""

from rack_monitor.models import HealthStatus


def classify(score: float, shaky_threshold: float, unhealthy_threshold: float) -> HealthStatus:
    """Map a health score to a status band.

    A score equal to a threshold belongs to the higher band: exactly
    ``shaky_threshold`` is healthy, exactly ``unhealthy_threshold`` is shaky.

    Args:
        score: Health score, 1.0 being fully healthy.
        shaky_threshold: Lowest score still considered healthy.
        unhealthy_threshold: Lowest score still considered shaky.

    Returns:
        The HealthStatus band for the score.
    """
    if score >= shaky_threshold:
        return HealthStatus.HEALTHY
    elif score >= unhealthy_threshold:
        return HealthStatus.SHAKY
    return HealthStatus.UNHEALTHY
