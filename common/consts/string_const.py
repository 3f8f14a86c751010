EMPTY_STRING = ""

COMMA = ","
