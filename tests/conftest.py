"""
Pytest configuration and shared fixtures
"""
import logging
import tempfile
from pathlib import Path

import pytest

from table_inspector.handlers.table_builder import parse_table
from table_inspector.models.schema import Column, Key, KeyColumn, KeyKind, Table


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def restore_root_logger():
    """Drop the root logger handlers installed by setup_logging"""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)


@pytest.fixture
def simple_ddl():
    """Smallest complete table definition"""
    return (
        "CREATE TABLE `t` (\n"
        "  `id` int NOT NULL,\n"
        "  PRIMARY KEY (`id`)\n"
        ") ENGINE=InnoDB DEFAULT CHARSET=utf8mb4"
    )


@pytest.fixture
def orders_ddl():
    """Table definition exercising every key kind and a foreign key"""
    return (
        "CREATE TABLE `orders` (\n"
        "  `id` int unsigned NOT NULL AUTO_INCREMENT,\n"
        "  `customer_id` int NOT NULL,\n"
        "  `reference` varchar(64) NOT NULL,\n"
        "  `note` text,\n"
        "  `amount` decimal(10,2) DEFAULT NULL,\n"
        "  `location` point NOT NULL,\n"
        "  `total` double GENERATED ALWAYS AS ((`amount` * 1.2)) VIRTUAL,\n"
        "  `created_year` year DEFAULT NULL,\n"
        "  PRIMARY KEY (`id`),\n"
        "  UNIQUE KEY `uk_reference` (`reference`),\n"
        "  KEY `idx_customer` (`customer_id`,`created_year`),\n"
        "  KEY `idx_note_prefix` (`note`(20)) USING BTREE,\n"
        "  SPATIAL KEY `sp_location` (`location`),\n"
        "  FULLTEXT KEY `ft_note` (`note`),\n"
        "  CONSTRAINT `fk_orders_customer` FOREIGN KEY (`customer_id`) "
        "REFERENCES `shop`.`customers` (`id`) ON DELETE CASCADE\n"
        ") ENGINE=InnoDB AUTO_INCREMENT=1999142 DEFAULT CHARSET=utf8mb4 "
        "COLLATE=utf8mb4_0900_ai_ci"
    )


@pytest.fixture
def film_actor_ddl():
    """Composite primary key and two foreign keys"""
    return (
        "CREATE TABLE `film_actor` (\n"
        "  `actor_id` smallint unsigned NOT NULL,\n"
        "  `film_id` smallint unsigned NOT NULL,\n"
        "  `last_update` timestamp NOT NULL DEFAULT CURRENT_TIMESTAMP "
        "ON UPDATE CURRENT_TIMESTAMP,\n"
        "  PRIMARY KEY (`actor_id`,`film_id`),\n"
        "  KEY `idx_fk_film_id` (`film_id`),\n"
        "  CONSTRAINT `fk_film_actor_actor` FOREIGN KEY (`actor_id`) "
        "REFERENCES `actor` (`actor_id`) ON DELETE RESTRICT ON UPDATE CASCADE,\n"
        "  CONSTRAINT `fk_film_actor_film` FOREIGN KEY (`film_id`) "
        "REFERENCES `film` (`film_id`) ON DELETE RESTRICT ON UPDATE CASCADE\n"
        ") ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_0900_ai_ci"
    )


@pytest.fixture
def view_ddl():
    """SHOW CREATE VIEW output"""
    return (
        "CREATE ALGORITHM=UNDEFINED DEFINER=`root`@`localhost` SQL SECURITY DEFINER "
        "VIEW `v_orders` AS select `orders`.`id` AS `id` from `orders`"
    )


@pytest.fixture
def orders_table(orders_ddl):
    """Parsed orders table"""
    return parse_table(orders_ddl)


def make_column(name, position, nullable=False):
    definition = f"`{name}` int" + ("" if nullable else " NOT NULL")
    return Column(
        name=name,
        position=position,
        data_type="int",
        definition=definition,
        nullable=nullable,
        numeric=True,
    )


def make_key(name, columns, unique=False, kind=KeyKind.BTREE):
    primary = name == "PRIMARY"
    return Key(
        name=name,
        kind=kind,
        primary=primary,
        unique=unique or primary,
        columns={col: KeyColumn(name=col, definition=f"`{col}`") for col in columns},
    )


@pytest.fixture
def table_factory():
    """
    Build a Table from column nullability and keys

    Usage: table_factory({'a': False, 'b': True}, [make_key(...), ...])
    """
    def _factory(columns, keys, name="t"):
        return Table(
            name=name,
            engine="InnoDB",
            charset="utf8mb4",
            columns={
                col: make_column(col, pos, nullable)
                for pos, (col, nullable) in enumerate(columns.items(), start=1)
            },
            keys={key.name: key for key in keys},
        )
    return _factory


@pytest.fixture
def key_factory():
    return make_key
