from importlib import metadata as importlib_metadata

DISTRIBUTION_NAME = "warehouse-catalog"


def get_project_version(name: str = DISTRIBUTION_NAME, default: str = "unknown") -> str:
    """
    Version of the installed distribution, or `default` when the package is
    imported from a source tree without being installed.
    """
    try:
        return importlib_metadata.version(name)
    except importlib_metadata.PackageNotFoundError:
        return default


def format_uptime(seconds: float) -> str:
    """Render a duration as `1d 2h 3m 4s`, dropping leading zero units."""
    total = max(int(seconds), 0)
    days, rem = divmod(total, 86_400)
    hours, rem = divmod(rem, 3_600)
    minutes, secs = divmod(rem, 60)

    parts = []
    if days:
        parts.append(f"{days}d")
    if days or hours:
        parts.append(f"{hours}h")
    if days or hours or minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{secs}s")
    return " ".join(parts)


__all__ = ["DISTRIBUTION_NAME", "get_project_version", "format_uptime"]
