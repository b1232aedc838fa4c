def match_to_catalog(records, catalog) -> list[tuple[int, str]]:
    """
    Join solve records to catalog problems on exact URL equality.

    `catalog` is any iterable of rows with `id` and `url`. Records whose URL
    is not in the catalog are dropped; they are problems nobody has added yet.
    Returns (problem_id, solved_at) pairs.
    """
    problem_ids_by_url = {row['url']: row['id'] for row in catalog}

    matched = []
    for record in records:
        problem_id = problem_ids_by_url.get(record['url'])
        if problem_id is not None:
            matched.append((problem_id, record['solved_at']))
    return matched
