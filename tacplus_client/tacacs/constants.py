"""TACACS+ protocol constants used by authorization requests (RFC 8907)."""

from enum import IntEnum


class TAC_PLUS_AUTHEN_METH(IntEnum):
    """authen_method field of an authorization REQUEST (RFC 8907 §6.1)"""

    TAC_PLUS_AUTHEN_METH_NOT_SET = 0x00
    TAC_PLUS_AUTHEN_METH_NONE = 0x01
    TAC_PLUS_AUTHEN_METH_KRB5 = 0x02
    TAC_PLUS_AUTHEN_METH_LINE = 0x03
    TAC_PLUS_AUTHEN_METH_ENABLE = 0x04
    TAC_PLUS_AUTHEN_METH_LOCAL = 0x05
    TAC_PLUS_AUTHEN_METH_TACACSPLUS = 0x06
    TAC_PLUS_AUTHEN_METH_GUEST = 0x08
    TAC_PLUS_AUTHEN_METH_RADIUS = 0x10
    TAC_PLUS_AUTHEN_METH_KRB4 = 0x11
    TAC_PLUS_AUTHEN_METH_RCMD = 0x20


class TAC_PLUS_AUTHEN_TYPE(IntEnum):
    TAC_PLUS_AUTHEN_TYPE_NOT_SET = 0x00
    TAC_PLUS_AUTHEN_TYPE_ASCII = 0x01
    TAC_PLUS_AUTHEN_TYPE_PAP = 0x02
    TAC_PLUS_AUTHEN_TYPE_CHAP = 0x03
    TAC_PLUS_AUTHEN_TYPE_ARAP = 0x04
    TAC_PLUS_AUTHEN_TYPE_MSCHAP = 0x05


class TAC_PLUS_AUTHEN_SVC(IntEnum):
    TAC_PLUS_AUTHEN_SVC_NONE = 0x00
    TAC_PLUS_AUTHEN_SVC_LOGIN = 0x01
    TAC_PLUS_AUTHEN_SVC_ENABLE = 0x02
    TAC_PLUS_AUTHEN_SVC_PPP = 0x03
    TAC_PLUS_AUTHEN_SVC_ARAP = 0x04
    TAC_PLUS_AUTHEN_SVC_PT = 0x05
    TAC_PLUS_AUTHEN_SVC_RCMD = 0x06
    TAC_PLUS_AUTHEN_SVC_X25 = 0x07
    TAC_PLUS_AUTHEN_SVC_NASI = 0x08
    TAC_PLUS_AUTHEN_SVC_FWPROXY = 0x09


class TAC_PLUS_AUTHOR_STATUS(IntEnum):
    """status field of an authorization REPLY (RFC 8907 §6.2)"""

    TAC_PLUS_AUTHOR_STATUS_PASS_ADD = 0x01
    TAC_PLUS_AUTHOR_STATUS_PASS_REPL = 0x02
    TAC_PLUS_AUTHOR_STATUS_FAIL = 0x10
    TAC_PLUS_AUTHOR_STATUS_ERROR = 0x11
    TAC_PLUS_AUTHOR_STATUS_FOLLOW = 0x21


# priv_lvl carried by every request; this client does not negotiate privilege
TAC_PLUS_PRIV_LVL_MIN = 0x00

# AV pairs added by this client are never flagged as mandatory
TAC_PLUS_AV_FLAG_NONE = 0
