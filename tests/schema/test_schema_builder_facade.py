import logging

from polysql.config import CompilerSettings
from polysql.query import CompiledQuery
from polysql.schema import SchemaBuilder

builder = SchemaBuilder("sqlite")


def test_create_through_callback():
    def define(table):
        table.increments()
        table.column("name").varchar(100)
        table.soft_deletes()

    statements = builder.create("users", define)
    assert statements == [
        'CREATE TABLE IF NOT EXISTS "users" ('
        '"id" INTEGER NOT NULL PRIMARY KEY CHECK ("id" >= 0), '
        '"name" VARCHAR(100) NOT NULL, '
        '"deleted_at" TIMESTAMP NULL);'
    ]


def test_settings_control_soft_delete_column():
    custom = SchemaBuilder("mysql", settings=CompilerSettings(deleted_at_column="removed_at"))
    statements = custom.create("posts", lambda table: table.soft_deletes())
    assert statements == ["CREATE TABLE IF NOT EXISTS `posts` (`removed_at` TIMESTAMP NULL);"]


def test_alter_through_callback():
    statements = builder.table("users", lambda table: table.column("age").int().null())
    assert statements == ['ALTER TABLE "users" ADD COLUMN "age" INTEGER NULL;']


def test_destructive_statements_log_warning(caplog):
    caplog.set_level(logging.WARNING, logger="polysql.schema.builder")
    assert builder.drop_if_exists("users") == ['DROP TABLE IF EXISTS "users";']
    assert builder.truncate("users") == ['DELETE FROM "users";']
    messages = [record.getMessage() for record in caplog.records]
    assert any("DROP TABLE generated for users" in message for message in messages)
    assert any("TRUNCATE generated for users" in message for message in messages)


def test_rename_and_catalog_queries():
    assert builder.rename("users", "members") == ['ALTER TABLE "users" RENAME TO "members";']
    assert isinstance(builder.has_table("users"), CompiledQuery)
    assert builder.has_column("users", "email").params == ("users", "email")
    assert builder.columns("users").params == ("users",)


def test_drop_without_guard():
    assert SchemaBuilder("pgsql").drop("users") == ['DROP TABLE "users";']
