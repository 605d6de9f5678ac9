from campus_attendance.database.bootstrap import DEFAULT_SCHEMA_PATH, split_sql_statements


def test_splits_on_semicolons_outside_literals():
    sql = """
    -- leading comment; not a statement
    CREATE TABLE a (id INT);
    INSERT INTO a VALUES ('x;y');
    INSERT INTO a VALUES ('it\\'s; fine')
    """
    assert list(split_sql_statements(sql)) == [
        "CREATE TABLE a (id INT)",
        "INSERT INTO a VALUES ('x;y')",
        "INSERT INTO a VALUES ('it\\'s; fine')",
    ]


def test_empty_statements_are_dropped():
    assert list(split_sql_statements(";;  ;\n-- only a comment\n")) == []


def test_bundled_schema_declares_the_three_tables():
    statements = list(split_sql_statements(DEFAULT_SCHEMA_PATH.read_text(encoding="utf-8")))
    creates = [s for s in statements if s.upper().startswith("CREATE TABLE")]
    joined = " ".join(creates)

    assert len(creates) == 3
    for table in ("actors", "attendance_records", "meal_scans"):
        assert table in joined
    assert "uq_attendance_actor_day" in joined
    assert "uq_meal_learner_day_type" in joined
