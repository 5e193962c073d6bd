from textual.widgets import Static


class HintBar(Static):
    """Displays the compose keyboard shortcuts."""

    def __init__(self):
        super().__init__(
            "[b]^S[/b] Save · [b]^A[/b] Send · [b]^T[/b] Cc · [b]^B[/b] Bcc · "
            "[b]Esc[/b] Back · [b]^Q[/b] Discard",
            id="hint-bar",
        )
