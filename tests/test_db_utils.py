import pytest

from quintave.core.db_utils import is_connection_error, return_default_on_db_error


class OperationalError(Exception):
    pass


def test_is_connection_error_matches_by_name():
    assert is_connection_error(OperationalError("server closed the connection"))
    assert is_connection_error(ConnectionRefusedError())
    assert not is_connection_error(ValueError("bad input"))


async def test_read_returns_default_when_database_is_down():
    @return_default_on_db_error(list)
    async def read_rows():
        raise OperationalError("connection lost")

    assert await read_rows() == []


async def test_other_errors_propagate():
    @return_default_on_db_error(list)
    async def read_rows():
        raise KeyError("missing")

    with pytest.raises(KeyError):
        await read_rows()
