import strata


def test_colors():
    assert strata.colors.cyan == '\u001b[38;5;51m'
    assert strata.colors.bcyan == '\u001b[1;38;5;51m'
    assert strata.colors.cyanbold == strata.colors.bcyan
    assert strata.colors['cyan'] == strata.colors.cyan
    assert strata.colors.reset == '\u001b[0m'
