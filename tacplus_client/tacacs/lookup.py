"""Symbolic names for the method, type and service axes of a request.

Each table is closed and ordered; the order is the one shown in the
usage message.
"""

from collections.abc import Mapping
from types import MappingProxyType

from .constants import TAC_PLUS_AUTHEN_METH, TAC_PLUS_AUTHEN_SVC, TAC_PLUS_AUTHEN_TYPE

METHODS: Mapping[str, int] = MappingProxyType(
    {
        "notset": TAC_PLUS_AUTHEN_METH.TAC_PLUS_AUTHEN_METH_NOT_SET,
        "none": TAC_PLUS_AUTHEN_METH.TAC_PLUS_AUTHEN_METH_NONE,
        "krb5": TAC_PLUS_AUTHEN_METH.TAC_PLUS_AUTHEN_METH_KRB5,
        "line": TAC_PLUS_AUTHEN_METH.TAC_PLUS_AUTHEN_METH_LINE,
        "enable": TAC_PLUS_AUTHEN_METH.TAC_PLUS_AUTHEN_METH_ENABLE,
        "local": TAC_PLUS_AUTHEN_METH.TAC_PLUS_AUTHEN_METH_LOCAL,
        "tacacsplus": TAC_PLUS_AUTHEN_METH.TAC_PLUS_AUTHEN_METH_TACACSPLUS,
        "rcmd": TAC_PLUS_AUTHEN_METH.TAC_PLUS_AUTHEN_METH_RCMD,
    }
)

TYPES: Mapping[str, int] = MappingProxyType(
    {
        "notset": TAC_PLUS_AUTHEN_TYPE.TAC_PLUS_AUTHEN_TYPE_NOT_SET,
        "ascii": TAC_PLUS_AUTHEN_TYPE.TAC_PLUS_AUTHEN_TYPE_ASCII,
        "pap": TAC_PLUS_AUTHEN_TYPE.TAC_PLUS_AUTHEN_TYPE_PAP,
        "chap": TAC_PLUS_AUTHEN_TYPE.TAC_PLUS_AUTHEN_TYPE_CHAP,
        "arap": TAC_PLUS_AUTHEN_TYPE.TAC_PLUS_AUTHEN_TYPE_ARAP,
        "mschap": TAC_PLUS_AUTHEN_TYPE.TAC_PLUS_AUTHEN_TYPE_MSCHAP,
    }
)

SERVICES: Mapping[str, int] = MappingProxyType(
    {
        "none": TAC_PLUS_AUTHEN_SVC.TAC_PLUS_AUTHEN_SVC_NONE,
        "login": TAC_PLUS_AUTHEN_SVC.TAC_PLUS_AUTHEN_SVC_LOGIN,
        "enable": TAC_PLUS_AUTHEN_SVC.TAC_PLUS_AUTHEN_SVC_ENABLE,
        "ppp": TAC_PLUS_AUTHEN_SVC.TAC_PLUS_AUTHEN_SVC_PPP,
        "arap": TAC_PLUS_AUTHEN_SVC.TAC_PLUS_AUTHEN_SVC_ARAP,
        "pt": TAC_PLUS_AUTHEN_SVC.TAC_PLUS_AUTHEN_SVC_PT,
        "rcmd": TAC_PLUS_AUTHEN_SVC.TAC_PLUS_AUTHEN_SVC_RCMD,
        "x25": TAC_PLUS_AUTHEN_SVC.TAC_PLUS_AUTHEN_SVC_X25,
        "nasi": TAC_PLUS_AUTHEN_SVC.TAC_PLUS_AUTHEN_SVC_NASI,
        "fwproxy": TAC_PLUS_AUTHEN_SVC.TAC_PLUS_AUTHEN_SVC_FWPROXY,
    }
)


def lookup(table: Mapping[str, int], name: str) -> int | None:
    """Return the protocol code for ``name`` or None when it is not in ``table``.

    Matching is exact and case-sensitive.
    """
    code = table.get(name)
    return None if code is None else int(code)
