import pytest

from polysql.config import CompilerSettings
from polysql.dialects import ColumnType
from polysql.errors import (
    BlueprintLocked,
    DuplicatePrimaryKey,
    InvalidColumnDefinition,
    InvalidForeignKeyAction,
    InvalidIdentifier,
)
from polysql.schema import Blueprint


def test_helper_columns():
    blueprint = Blueprint("users")
    identifier = blueprint.id()
    uid = blueprint.uid()
    created, updated = blueprint.timestamps()
    deleted = blueprint.soft_deletes()

    assert identifier.type is ColumnType.BIGINT and identifier.is_auto and identifier.is_unsigned
    assert uid.type is ColumnType.CHAR and uid.size == 36 and uid.is_unique
    assert [created.name, updated.name] == ["created_at", "updated_at"]
    assert created.nullable and updated.nullable
    assert deleted.name == "deleted_at" and deleted.nullable
    assert [column.name for column in blueprint.columns] == [
        "id",
        "uid",
        "created_at",
        "updated_at",
        "deleted_at",
    ]


def test_soft_deletes_follows_settings():
    blueprint = Blueprint("users", settings=CompilerSettings(deleted_at_column="removed_at"))
    assert blueprint.soft_deletes().name == "removed_at"
    assert Blueprint("posts").soft_deletes("archived_at").name == "archived_at"


def test_duplicate_column_is_rejected():
    blueprint = Blueprint("users")
    blueprint.column("email").varchar()
    with pytest.raises(InvalidColumnDefinition):
        blueprint.column("email")
    assert blueprint.has_column("email")
    assert blueprint.get_column("email").name == "email"
    with pytest.raises(KeyError):
        blueprint.get_column("missing")


def test_composite_primary_counts_as_the_primary_key():
    blueprint = Blueprint("role_user")
    blueprint.column("role_id").int()
    blueprint.column("user_id").int()
    blueprint.primary("role_id", "user_id")
    assert blueprint.composite_primary == ("role_id", "user_id")
    assert blueprint.primary_key == "(role_id, user_id)"
    with pytest.raises(DuplicatePrimaryKey):
        blueprint.column("id").int().auto()


def test_table_level_primary_conflicts_with_column_primary():
    blueprint = Blueprint("t")
    blueprint.column("id").int().primary()
    with pytest.raises(DuplicatePrimaryKey):
        blueprint.primary("id")

    other = Blueprint("t")
    other.column("id").int()
    other.primary("id")
    with pytest.raises(DuplicatePrimaryKey):
        other.get_column("id").auto()


def test_composite_primary_members_are_not_nullable():
    blueprint = Blueprint("t")
    first = blueprint.column("a").int().null()
    second = blueprint.column("b").int()
    blueprint.primary("a", "b")
    assert first.nullable is False
    assert second.nullable is False


def test_indexes_and_foreign_keys():
    blueprint = Blueprint("posts")
    blueprint.unique("slug", "locale", name="posts_slug_locale")
    blueprint.index("created_at")
    fk = blueprint.foreign("user_id").references("id").on("users").cascade().named("posts_owner")

    assert blueprint.indexes[0].unique and blueprint.indexes[0].name == "posts_slug_locale"
    assert blueprint.indexes[1].columns == ("created_at",)
    assert fk.delete_action == "CASCADE" and fk.update_action == "CASCADE"
    assert fk.referenced_table == "users"
    assert fk.constraint_name == "posts_owner"


def test_foreign_key_action_is_validated():
    blueprint = Blueprint("posts")
    fk = blueprint.foreign("user_id")
    assert fk.on_delete("set  null").delete_action == "SET NULL"
    with pytest.raises(InvalidForeignKeyAction):
        fk.on_update("DROP EVERYTHING")


def test_table_options_are_validated():
    blueprint = Blueprint("users").engine("InnoDB").charset("utf8mb4")
    assert blueprint.options.engine == "InnoDB"
    assert not blueprint.options.is_empty()
    with pytest.raises(InvalidIdentifier):
        blueprint.collation("utf8; DROP TABLE users")


def test_table_name_is_validated():
    with pytest.raises(InvalidIdentifier):
        Blueprint("users; --")
    assert Blueprint("app.users").table == "app.users"


def test_keys_without_columns_are_rejected():
    blueprint = Blueprint("users")
    with pytest.raises(InvalidColumnDefinition):
        blueprint.index()


def test_lock_is_final():
    blueprint = Blueprint("users")
    blueprint.lock()
    assert blueprint.locked
    with pytest.raises(BlueprintLocked):
        blueprint.foreign("user_id")
    with pytest.raises(BlueprintLocked):
        blueprint.engine("InnoDB")
