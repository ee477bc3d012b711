import pytest

from chuck.core.dad_comments import get_dad_comment


@pytest.mark.parametrize(
    ("subject", "selected", "expected"),
    [
        ("Fix null check", True, "\"That's a keeper - everyone needs that fix\""),
        ("Squash a nasty bug", True, "\"That's a keeper - everyone needs that fix\""),
        ("Add string utils", True, '"Yep, chuck that back to template"'),
        ("Optimize startup", True, "\"That's good stuff right there\""),
        ("Rename module", True, "\"That's a keeper right there\""),
        ("Update deploy script", False, '"Nah, that stays with your app"'),
        ("Tweak business rules", False, "\"That's your problem, not theirs\""),
        ("Rename module", False, '"Keep that one to yourself, kiddo"'),
    ],
)
def test_comment_depends_on_subject_and_selection(
    subject: str, selected: bool, expected: str
) -> None:
    assert get_dad_comment(subject, selected) == expected
