from campus_attendance.scans.badge import render_badge_png


def test_badge_is_a_png(learner):
    data = render_badge_png(learner)
    assert data.startswith(b"\x89PNG\r\n\x1a\n")
