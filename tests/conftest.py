from datetime import datetime

import pytest

from stridekit.activity import Activity
from stridekit.database import get_all_models, migrate_tables
from stridekit.db import configure_db, get_db

# Header of the bulk activities.csv export. Several names repeat; the
# numeric columns from index 15 on are the ones the parser reads.
EXPORT_HEADER = [
    "Activity ID",
    "Activity Date",
    "Activity Name",
    "Activity Type",
    "Activity Description",
    "Elapsed Time",
    "Distance",
    "Max Heart Rate",
    "Relative Effort",
    "Commute",
    "Activity Private Note",
    "Activity Gear",
    "Filename",
    "Athlete Weight",
    "Bike Weight",
    "Elapsed Time",
    "Moving Time",
    "Distance",
    "Max Speed",
    "Average Speed",
    "Elevation Gain",
    "Elevation Loss",
    "Elevation Low",
    "Elevation High",
    "Max Grade",
    "Average Grade",
    "Average Positive Grade",
    "Average Negative Grade",
    "Max Cadence",
    "Average Cadence",
    "Max Heart Rate",
    "Average Heart Rate",
    "Max Watts",
]


def export_row(
    activity_id,
    date,
    name="Morning Run",
    activity_type="Run",
    distance_m="5000.0",
    elapsed="1800",
    moving="1750",
    elevation="42.5",
    max_hr="",
    avg_hr="",
    description="",
):
    """Build one CSV line in export column order; text cells are quoted."""
    cells = [""] * len(EXPORT_HEADER)
    cells[0] = str(activity_id)
    cells[1] = f'"{date}"'
    cells[2] = f'"{name}"'
    cells[3] = activity_type
    cells[4] = f'"{description}"'
    cells[15] = str(elapsed)
    cells[16] = str(moving)
    cells[17] = str(distance_m)
    cells[20] = str(elevation)
    cells[30] = str(max_hr)
    cells[31] = str(avg_hr)
    return ",".join(cells)


def export_csv(*rows, newline="\n"):
    return newline.join([",".join(EXPORT_HEADER), *rows]) + newline


def make_activity(activity_id="1", date=None, distance_km=5.0, activity_type="Run", name="Run"):
    return Activity(
        id=str(activity_id),
        date=date or datetime(2024, 1, 1, 7, 30),
        name=name,
        type=activity_type,
        distance_km=distance_km,
        elapsed_time=1800,
        moving_time=1700,
    )


@pytest.fixture(autouse=True)
def reset_user_context():
    """Reset the user_id ContextVar to 0 before every test."""
    from stridekit.user_context import set_user_id

    set_user_id(0)


@pytest.fixture(scope="session", autouse=True)
def test_db(tmp_path_factory):
    test_db_path = tmp_path_factory.mktemp("db") / "test.sqlite3"
    configure_db(str(test_db_path))
    db = get_db()
    db.connect(reuse_if_open=True)
    migrate_tables(get_all_models())
    yield
    db.close()


@pytest.fixture(autouse=True)
def clean_tables():
    """Empty every table so tests do not see each other's rows."""
    get_db().connect(reuse_if_open=True)
    for model in get_all_models():
        model.delete().execute()
