def reconcile(matched, existing_ids) -> list[tuple[int, str]]:
    """
    Return the matched (problem_id, solved_at) pairs that are not recorded yet.

    A problem already in `existing_ids` is never returned again, which is
    what makes re-running an import a no-op. Duplicate problem ids inside
    `matched` collapse to the earliest solved_at.
    """
    existing = set(existing_ids)
    earliest = {}
    for problem_id, solved_at in matched:
        if problem_id in existing:
            continue
        # ISO-8601 UTC strings order the same way as the instants they name
        if problem_id not in earliest or solved_at < earliest[problem_id]:
            earliest[problem_id] = solved_at
    return list(earliest.items())
