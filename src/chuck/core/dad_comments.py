"""One-line commentary shown under each commit in the selection list."""


def get_dad_comment(subject: str, selected: bool) -> str:
    """Pick a comment for a commit based on its subject and selection."""
    lowered = subject.lower()

    if selected:
        if "fix" in lowered or "bug" in lowered:
            return '"That\'s a keeper - everyone needs that fix"'
        if "add" in lowered and ("util" in lowered or "helper" in lowered):
            return '"Yep, chuck that back to template"'
        if "improve" in lowered or "optimize" in lowered:
            return '"That\'s good stuff right there"'
        return '"That\'s a keeper right there"'

    if "config" in lowered or "deploy" in lowered:
        return '"Nah, that stays with your app"'
    if "app" in lowered or "business" in lowered:
        return '"That\'s your problem, not theirs"'
    return '"Keep that one to yourself, kiddo"'
