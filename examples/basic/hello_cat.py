"""Concatenate mixed values with one exactly-sized allocation."""

from exactcat import HEX, IntFormat, SignPolicy, cat, repeat

print(cat("(", "a", ")", " ", 12, " + ", 7, " = ", 12 + 7))
print(cat("0x", HEX(255), " ", IntFormat(min_len=4)(7), " ", IntFormat(sign=SignPolicy.PLUS)(5)))
print(cat("[", repeat("=", 10), "]"))
