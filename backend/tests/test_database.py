"""Tests for engine construction helpers."""

from velofit.database import server_connect_args


def test_postgresql_statement_timeout():
    args = server_connect_args("postgresql+psycopg2://velofit:secret@db/velofit", 5)

    assert args["options"] == "-c statement_timeout=5000"
    assert args["connect_timeout"] == 5


def test_mysql_read_timeout():
    args = server_connect_args("mysql+pymysql://velofit:secret@db/velofit", 2.5)

    assert args == {"read_timeout": 2, "connect_timeout": 2}


def test_sub_second_timeout_rounds_up_to_one_second():
    assert server_connect_args("mysql+pymysql://velofit@db/velofit", 0.2)["read_timeout"] == 1


def test_other_backends_get_no_driver_arguments():
    assert server_connect_args("oracle://velofit:secret@db/velofit", 5) == {}
