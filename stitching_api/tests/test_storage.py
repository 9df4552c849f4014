from src.db.models import Expense, ProductionUnit
from src.db.session import WorkbookEngine, WorkbookSession
from src.db.workbook import read_frame, write_rows
from src.repositories.production import ProductionUnitRepository


def test_initialize_creates_header_only_tables(tmp_path):
    engine = WorkbookEngine(tmp_path / "data", tmp_path / "reports")
    engine.initialize([ProductionUnit, Expense])

    df = read_frame(engine.path_for(ProductionUnit))
    assert list(df.columns) == ProductionUnit.columns()
    assert df.empty
    assert (tmp_path / "reports").is_dir()


def test_records_round_trip_through_workbook(tmp_path):
    engine = WorkbookEngine(tmp_path, tmp_path / "reports")
    session = WorkbookSession(engine)
    repo = ProductionUnitRepository(session)

    created = repo._insert({"name": "Cutting", "location": "Surat"})
    loaded = engine.load(ProductionUnit)

    assert [u.id for u in loaded] == [1]
    assert loaded[0].name == "Cutting"
    assert loaded[0].status == "active"
    assert loaded[0].cost_to_date == 0.0
    assert loaded[0].created_at == created.created_at


def test_ids_continue_from_current_maximum(tmp_path):
    session = WorkbookSession(WorkbookEngine(tmp_path, tmp_path / "reports"))
    repo = ProductionUnitRepository(session)
    for name in ("A", "B", "C"):
        repo._insert({"name": name, "location": "X"})

    repo._delete(2)
    assert repo._insert({"name": "D", "location": "X"}).id == 4

    repo._delete(4)
    # deleting the highest id frees it again
    assert repo._insert({"name": "E", "location": "X"}).id == 4


def test_loose_cells_are_normalised_and_bad_rows_skipped(tmp_path):
    engine = WorkbookEngine(tmp_path, tmp_path / "reports")
    rows = [
        {
            "id": 1,
            "production_unit_id": 1,
            "description": "Thread",
            "amount": 525,
            "hsn": 5208,
            "category": "Raw Materials",
            "date": "2025-01-15T10:00:00",
            "currency": "INR",
        },
        # no description: unreadable
        {"id": 2, "production_unit_id": 1, "amount": 10, "category": "Rent", "date": "2025-01-16T10:00:00"},
    ]
    write_rows(engine.path_for(Expense), Expense.columns(), rows, sheet_name="Expenses")

    loaded = engine.load(Expense)

    assert len(loaded) == 1
    expense = loaded[0]
    assert expense.hsn == "5208"
    assert expense.amount == 525.0
    assert expense.gst_rate is None
    assert expense.date.day == 15
