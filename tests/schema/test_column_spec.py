import pytest

from polysql.errors import BlueprintLocked, DuplicatePrimaryKey, InvalidColumnDefinition, InvalidIdentifier
from polysql.schema import Blueprint, DefaultValue, NoDefault, Raw


def test_unique_forces_not_null_regardless_of_call_order():
    blueprint = Blueprint("t")
    column = blueprint.column("email").varchar().unique().null()
    assert column.nullable is False


def test_auto_implies_primary_and_drops_default():
    blueprint = Blueprint("t")
    column = blueprint.column("id").int().default(5).auto()
    assert column.is_primary
    assert column.nullable is False
    assert column.effective_default is NoDefault
    assert column.declared_default == DefaultValue(5)


def test_false_default_is_not_confused_with_no_default():
    blueprint = Blueprint("t")
    column = blueprint.column("active").boolean().default(False)
    assert column.effective_default == DefaultValue(False)
    assert column.effective_default is not NoDefault


def test_null_default_marks_column_nullable():
    blueprint = Blueprint("t")
    column = blueprint.column("nickname").varchar().default(None)
    assert column.nullable is True
    assert column.effective_default is NoDefault


def test_spatial_and_unique_columns_suppress_default():
    blueprint = Blueprint("t")
    point = blueprint.column("location").point().default("POINT(0 0)")
    code = blueprint.column("code").char(4).unique().default("AAAA")
    assert point.is_special
    assert point.effective_default is NoDefault
    assert code.effective_default is NoDefault


def test_use_current_sets_raw_default():
    blueprint = Blueprint("t")
    column = blueprint.column("created_at").timestamp().use_current()
    assert column.effective_default == DefaultValue(Raw("CURRENT_TIMESTAMP"))


def test_second_primary_column_is_rejected():
    blueprint = Blueprint("t")
    blueprint.column("id").int().auto()
    with pytest.raises(DuplicatePrimaryKey):
        blueprint.column("code").int().primary()


def test_repeating_primary_on_same_column_is_allowed():
    blueprint = Blueprint("t")
    column = blueprint.column("id").int().primary().auto()
    assert blueprint.primary_key == "id"
    assert column.is_auto


def test_length_validation():
    blueprint = Blueprint("t")
    column = blueprint.column("price").decimal(10, 4)
    assert column.size == "10,4"
    assert blueprint.column("body").varchar().length("MAX").size == "MAX"
    with pytest.raises(InvalidColumnDefinition):
        blueprint.column("name").varchar(0)
    with pytest.raises(InvalidColumnDefinition):
        blueprint.column("flag").char(True)
    with pytest.raises(InvalidColumnDefinition):
        blueprint.column("ratio").decimal(scale=2)


def test_enum_and_set_require_string_values():
    blueprint = Blueprint("t")
    assert blueprint.column("status").enum("open", "closed", "open").values == ("open", "closed")
    assert blueprint.column("tags").set(["a", "b"]).values == ("a", "b")
    with pytest.raises(InvalidColumnDefinition):
        blueprint.column("kind").enum()
    with pytest.raises(InvalidColumnDefinition):
        blueprint.column("level").enum("low", 3)


def test_invalid_column_name():
    blueprint = Blueprint("t")
    with pytest.raises(InvalidIdentifier):
        blueprint.column("bad name")
    with pytest.raises(InvalidIdentifier):
        blueprint.column("id\n")
    with pytest.raises(InvalidIdentifier):
        Blueprint("users\n")


def test_check_requires_expression():
    blueprint = Blueprint("t")
    with pytest.raises(InvalidColumnDefinition):
        blueprint.column("age").int().check("  ")


def test_locked_blueprint_rejects_column_changes():
    blueprint = Blueprint("t")
    column = blueprint.column("id").int()
    blueprint.lock()
    with pytest.raises(BlueprintLocked):
        column.null()
    with pytest.raises(BlueprintLocked):
        blueprint.column("other")
