# cricphase/ingest.py
"""
Load a ball-by-ball CSV (IPL-style column names) into the deliveries table.

    python -m cricphase.ingest data/ipl_deliveries.csv
"""
import argparse
import logging
from typing import Dict, List, Optional

import pandas as pd
from sqlalchemy.orm import Session

from cricphase.core import models
from cricphase.database import SessionLocal, init_db

logger = logging.getLogger(__name__)

# CSV column -> deliveries column
IPL_COLUMNS = {
    "match_id": "match_id",
    "innings": "innings",
    "over": "over",
    "ball": "ball",
    "batter": "batter",
    "bowler": "bowler",
    "valid_ball": "valid_ball",
    "runs_batter": "runs_batter",
    "runs_extras": "runs_extras",
    "striker_out": "striker_out",
    "wicket_type": "wicket_type",
    "wicket_kind": "wicket_kind",
    "fielders": "fielders",
    "batting_team": "batting_team",
    "bowling_team": "bowling_team",
    "venue": "venue",
    "season": "season",
    "date": "date",
}

INTEGER_COLUMNS = ["innings", "over", "ball", "runs_batter", "runs_extras"]
BOOLEAN_COLUMNS = ["valid_ball", "striker_out"]
TRUE_VALUES = {"1", "true", "yes", "y", "t"}


def parse_bool(value) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip().lower() in TRUE_VALUES
    return bool(value)


def parse_fielders(value) -> Optional[List[str]]:
    if value is None:
        return None
    names = [name.strip() for name in str(value).split(",") if name.strip()]
    return names or None


def read_deliveries(path: str, columns: Dict[str, str] = None) -> pd.DataFrame:
    columns = columns or IPL_COLUMNS
    df = pd.read_csv(path, low_memory=False)
    df = df.rename(columns=columns)
    df = df[[c for c in columns.values() if c in df.columns]]

    for column in INTEGER_COLUMNS:
        if column in df.columns:
            df[column] = pd.to_numeric(df[column], errors="coerce").astype("Int64")

    # NaN/NA -> None so missing fields stay null in the store
    return df.astype(object).where(df.notna(), None)


def to_row(record: dict) -> models.Delivery:
    values = dict(record)
    for column in INTEGER_COLUMNS:
        if values.get(column) is not None:
            values[column] = int(values[column])
    for column in BOOLEAN_COLUMNS:
        if column in values:
            values[column] = parse_bool(values[column])
    if "fielders" in values:
        values["fielders"] = parse_fielders(values["fielders"])
    for column in ("match_id", "season", "date"):
        if values.get(column) is not None:
            values[column] = str(values[column])
    return models.Delivery(**values)


def load_deliveries(db: Session, df: pd.DataFrame, batch_size: int = 5000) -> int:
    records = df.to_dict(orient="records")
    for start in range(0, len(records), batch_size):
        db.add_all([to_row(r) for r in records[start:start + batch_size]])
        db.commit()
        logger.info("Loaded %d/%d deliveries", min(start + batch_size, len(records)), len(records))
    return len(records)


def main(argv: List[str] = None):
    parser = argparse.ArgumentParser(description="Load ball-by-ball deliveries into the cricphase database")
    parser.add_argument("csv_path")
    parser.add_argument("--batch-size", type=int, default=5000)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    init_db()
    db = SessionLocal()
    try:
        count = load_deliveries(db, read_deliveries(args.csv_path), args.batch_size)
        print(f"Loaded {count} deliveries from {args.csv_path}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
