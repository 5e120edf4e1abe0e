import random

from deptportal import leaderboard


def test_rank_example():
    ranked = leaderboard.rank([{"total_points": 93}, {"total_points": 73}])
    assert ranked == [{"total_points": 93, "rank": 1}, {"total_points": 73, "rank": 2}]


def test_rank_empty_population():
    assert leaderboard.rank([]) == []
    assert leaderboard.marks_leaderboard([], [], year="1") == []


def test_ranks_are_consecutive_and_scores_descending():
    rng = random.Random(7)
    for _ in range(50):
        entries = [{"total_points": rng.randint(0, 300)} for _ in range(rng.randint(0, 40))]
        ranked = leaderboard.rank(entries)
        assert [e["rank"] for e in ranked] == list(range(1, len(entries) + 1))
        points = [e["total_points"] for e in ranked]
        assert points == sorted(points, reverse=True)


def test_ties_keep_input_order():
    entries = [{"total_points": 10, "name": "a"}, {"total_points": 20, "name": "b"}, {"total_points": 10, "name": "c"}]
    assert [e["name"] for e in leaderboard.rank(entries)] == ["b", "a", "c"]


def test_filter_then_rank_matches_rank_then_filter():
    rng = random.Random(11)
    students = [
        {"id": i, "name": f"S{i}", "roll_no": f"R{i}", "year": rng.choice("1234")}
        for i in range(1, 31)
    ]
    marks = [{"student_id": rng.randint(1, 30), "total": rng.randint(0, 100)} for _ in range(60)]
    everyone = leaderboard.marks_leaderboard(students, marks)
    for year in "1234":
        filtered = leaderboard.marks_leaderboard(students, marks, year=year)
        assert [e["roll_no"] for e in filtered] == [e["roll_no"] for e in everyone if e["year_level"] == year]
        assert [e["rank"] for e in filtered] == list(range(1, len(filtered) + 1))


def test_all_years_aliases(memory_store):
    total = len(memory_store.list_students())
    for year in (None, "All", "All Years"):
        assert len(leaderboard.leaderboard(memory_store, year)) == total


def test_marks_leaderboard_on_demo_roster(memory_store):
    board = leaderboard.leaderboard(memory_store, "1")
    assert [(e["roll_no"], e["total_points"]) for e in board[:2]] == [("CS101", 261), ("CS102", 164)]
    assert board[2]["total_points"] == 0
    assert {e["year_level"] for e in board} == {"1"}


def test_achievement_leaderboard_counts_only_approved(memory_store):
    board = leaderboard.leaderboard(memory_store, "All", metric="achievements")
    assert board[0]["roll_no"] == "CS101"
    assert board[0]["total_points"] == 20  # the pending hackathon entry does not count
    assert board[1]["roll_no"] == "CS102"
    assert board[1]["total_points"] == 15


def test_subject_leaderboard(memory_store):
    board = leaderboard.subject_leaderboard(memory_store.list_marks(subject_id=101))
    assert [(e["rank"], e["total_points"]) for e in board] == [(1, 93), (2, 73)]
    assert all(e["year_level"] == "N/A" for e in board)


def test_missing_year_defaults_to_first():
    board = leaderboard.marks_leaderboard([{"id": 1, "name": "X", "roll_no": "R1", "year": None}], [])
    assert board[0]["year_level"] == "1"
