def modulo_groups(text: str, period: int) -> list[str]:
    """
    Split text into `period` groups by position modulo `period`.

    Group i holds the characters at indices i, i + period, i + 2*period...
    """
    if period < 1:
        return []
    return [text[i::period] for i in range(period)]
