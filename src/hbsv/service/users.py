"""Lookups against the OS user database."""

import pwd
from typing import NamedTuple

from hbsv.service.errors import UserNotFoundError


class OwnerIds(NamedTuple):
    """Numeric owner of files created for the service account."""

    uid: int
    gid: int


def _lookup(username: str) -> pwd.struct_passwd:
    try:
        return pwd.getpwnam(username)
    except KeyError as e:
        raise UserNotFoundError(username) from e


def ensure_user_exists(username: str) -> None:
    """Raise UserNotFoundError unless the account exists."""
    _lookup(username)


def resolve_owner_ids(username: str) -> OwnerIds:
    """Return the uid and primary gid of an account.

    Raises:
        UserNotFoundError: If the account does not exist.
    """
    entry = _lookup(username)
    return OwnerIds(uid=entry.pw_uid, gid=entry.pw_gid)
