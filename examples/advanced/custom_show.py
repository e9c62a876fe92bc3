"""Teach your own types to show themselves.

A Show value needs two methods: show_length() returning the exact UTF-8
byte count, and show_write(sink) writing exactly that many bytes.
"""

from exactcat import IntFormat, SignPolicy, SinkWriter, cat, cat_length, cat_write

COORD = IntFormat(min_len=3, sign=SignPolicy.SPACE)


class Point:
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def _parts(self) -> list:
        return ["(", COORD(self.x), ", ", COORD(self.y), ")"]

    def show_length(self) -> int:
        return cat_length(*self._parts())

    def show_write(self, sink: SinkWriter) -> int:
        return cat_write(sink, *self._parts())


if __name__ == "__main__":
    path = [Point(0, 0), Point(12, -4), Point(250, 99)]
    print(cat("path: ", *path))
