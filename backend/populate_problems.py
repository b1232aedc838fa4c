import argparse
import json
import os
import sqlite3
import yaml
from pathlib import Path
from dotenv import load_dotenv
from scrape.urls import canonical_url, platform_for_url

DEFAULT_PROBLEMS_DIR = Path(__file__).resolve().parent / "data" / "problems"

def load_problems(input_dir) -> list[dict]:
    """
    Read every *.yaml file under input_dir. Each file is a list of entries:

        - name: Watermelon
          url: https://codeforces.com/problemset/problem/4/A
          difficulty: 800
          tags: [math]

    `link` is accepted as an alias of `url`. URLs come back canonical.
    """
    problems = []
    for yaml_path in sorted(Path(input_dir).rglob("*.yaml")):
        with open(yaml_path, "r", encoding="utf-8") as f:
            entries = yaml.safe_load(f) or []

        for entry in entries:
            url = canonical_url(entry.get("url") or entry.get("link"))
            if not entry.get("name") or not url:
                print(f"Skipping incomplete entry in {yaml_path.name}: {entry!r}")
                continue
            source = platform_for_url(url)
            if source is None:
                print(f"Skipping unsupported problem link in {yaml_path.name}: {url}")
                continue
            problems.append({
                "name": str(entry["name"]),
                "url": url,
                "source": source,
                "difficulty": entry.get("difficulty"),
                "tags": [str(t) for t in entry.get("tags") or []],
            })
    return problems

def populate(db_path, input_dir):
    """Insert problems that are not in the catalog yet. Returns (inserted, skipped)."""
    problems = load_problems(input_dir)

    conn = sqlite3.connect(db_path)
    cur = conn.cursor()
    inserted = 0
    for p in problems:
        cur.execute(
            '''
            INSERT INTO problems (name, url, source, difficulty, tags, added_by)
            VALUES (?, ?, ?, ?, ?, 'seed')
            ON CONFLICT(url) DO NOTHING
            ''',
            (p["name"], p["url"], p["source"], p["difficulty"], json.dumps(p["tags"]))
        )
        inserted += cur.rowcount
    conn.commit()
    conn.close()

    return inserted, len(problems) - inserted

def main():
    load_dotenv()
    parser = argparse.ArgumentParser(description="Seed the problem catalog from YAML files")
    parser.add_argument("input_dir", nargs="?", default=os.getenv("PROBLEMS_DIR", str(DEFAULT_PROBLEMS_DIR)))
    parser.add_argument("--db", default=os.getenv("DATABASE_PATH", "database.db"), help="SQLite database path")
    args = parser.parse_args()

    inserted, skipped = populate(args.db, args.input_dir)
    print(f"Inserted {inserted} problems ({skipped} already present) from {args.input_dir}")

if __name__ == "__main__":
    main()
