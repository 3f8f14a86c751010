"""
Error code definitions
"""

# =========================
# Base
# =========================

RET_OK = 0                  # success
RET_ERR = 1                 # generic error


# =========================
# Request & Parameters (100–199)
# =========================

RET_INVALID_PARAM = 100         # invalid parameter
RET_MISSING_PARAM = 101         # missing required parameter
RET_JSON_PARSE_ERROR = 104      # json parse error


# =========================
# Auth & Permission (200–299)
# =========================

RET_FORBIDDEN = 201             # forbidden


# =========================
# Business Logic (300–399)
# =========================

RET_RESOURCE_NOT_FOUND = 301     # resource not found
RET_OPERATION_NOT_ALLOWED = 305  # operation not allowed


# =========================
# Data & Storage (500–599)
# =========================

RET_DB_ERROR = 500               # database error
RET_OBJECT_STORAGE_ERROR = 530   # object storage error
