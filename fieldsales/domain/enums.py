import enum


class VisitStatus(str, enum.Enum):
    UNVISITED = "Unvisited"
    VISITED = "Visited"

    @classmethod
    def coerce(cls, value) -> "VisitStatus":
        """
        Normalizes the legacy encodings of the visited flag.
        Older rows stored 0/1 (or booleans), newer ones the string label.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.VISITED if value else cls.UNVISITED
        if isinstance(value, int):
            if value in (0, 1):
                return cls.VISITED if value else cls.UNVISITED
            raise ValueError(f"Unknown visit flag: {value!r}")
        if isinstance(value, str):
            cleaned = value.strip().lower()
            if cleaned in ("visited", "1", "true"):
                return cls.VISITED
            if cleaned in ("unvisited", "0", "false", ""):
                return cls.UNVISITED
        raise ValueError(f"Unknown visit status: {value!r}")
