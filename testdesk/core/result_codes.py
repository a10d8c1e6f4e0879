# File: /testdesk/core/result_codes.py | Version: 1.0 | Title: Numeric result codes carried by the response envelope
from enum import IntEnum


class ResultCode(IntEnum):
    SUCCESS = 100200
    BAD_REQUEST = 100400
    UNAUTHORIZED = 100401
    FORBIDDEN = 100403
    NOT_FOUND = 100404
    FAILED = 100500

    # Notice: saved, but some receivers could not be resolved
    NOTICE_PARTIAL_RECEIVERS = 102001

    # User views
    USER_VIEW_EXIST = 101513


# HTTP status -> envelope code for errors raised as plain HTTPException
HTTP_STATUS_CODES = {
    400: ResultCode.BAD_REQUEST,
    401: ResultCode.UNAUTHORIZED,
    403: ResultCode.FORBIDDEN,
    404: ResultCode.NOT_FOUND,
    422: ResultCode.BAD_REQUEST,
    500: ResultCode.FAILED,
}
