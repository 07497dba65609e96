from polysql.dialects import FIREBIRD, MYSQL, ORACLE, POSTGRES, SQLITE, SQLSRV, ColumnType, TypeName


def test_type_name_renders_default_and_explicit_length():
    assert TypeName("VARCHAR", 255).render() == "VARCHAR(255)"
    assert TypeName("VARCHAR", 255).render(100) == "VARCHAR(100)"
    assert TypeName("TEXT").render() == "TEXT"
    assert TypeName("FLOAT(53)").render(10) == "FLOAT(53)"


def test_integer_and_spatial_families():
    assert ColumnType.BIGINT.is_integer
    assert not ColumnType.DECIMAL.is_integer
    assert ColumnType.MULTIPOLYGON.is_spatial
    assert not ColumnType.BLOB.is_spatial


def test_every_dialect_maps_every_type():
    for dialect in (MYSQL, POSTGRES, SQLITE, SQLSRV, ORACLE, FIREBIRD):
        for column_type in ColumnType:
            assert dialect.type_name(column_type).name


def test_representative_type_spellings():
    assert MYSQL.type_name(ColumnType.DECIMAL).render() == "DECIMAL(8,2)"
    assert SQLITE.type_name(ColumnType.DECIMAL).render() == "NUMERIC"
    assert POSTGRES.type_name(ColumnType.JSON).render() == "JSONB"
    assert SQLSRV.type_name(ColumnType.TEXT).render() == "VARCHAR(MAX)"
    assert SQLSRV.type_name(ColumnType.BOOLEAN).render() == "BIT"
    assert ORACLE.type_name(ColumnType.VARCHAR).render() == "VARCHAR2(255)"
    assert ORACLE.type_name(ColumnType.BOOLEAN).render() == "NUMBER(1)"
    assert FIREBIRD.type_name(ColumnType.TEXT).render() == "BLOB SUB_TYPE TEXT"


def test_postgres_serial_types():
    assert POSTGRES.serial_type(ColumnType.INT) == "SERIAL"
    assert POSTGRES.serial_type(ColumnType.BIGINT) == "BIGSERIAL"
    assert POSTGRES.serial_type(ColumnType.VARCHAR) is None
    assert MYSQL.serial_type(ColumnType.INT) is None
