from pygments.style import Style
from pygments.token import Keyword, Name, Number, Punctuation, String, Token


class LogStyle(Style):
    """Muted palette for the JSON tail of log lines."""

    styles = {
        Token: "#a8a8a8",
        Punctuation: "#6c6c6c",
        Name.Tag: "#5fafd7",
        String: "#87af5f",
        String.Double: "#87af5f",
        Number: "#d7875f",
        Keyword.Constant: "#af87d7",
    }
