def format_duration(seconds: float) -> str:
    """Short human-readable duration for diagnostics lines and training logs."""
    if seconds <= 0:
        return "0 ms"
    # single-message classification usually finishes well under a millisecond
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.0f} µs"
    if seconds < 1:
        return f"{seconds * 1000:.1f} ms"
    if seconds < 60:
        return f"{seconds:.2f} s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)} min {rest:.0f} s"
