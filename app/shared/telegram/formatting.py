import re

# Orden relevante: **negrita** debe procesarse antes que *cursiva*
_MARKUP_RULES = [
    (re.compile(r"\*\*(.*?)\*\*"), r"<b>\1</b>"),
    (re.compile(r"\*(.*?)\*"), r"<i>\1</i>"),
    (re.compile(r"__(.*?)__"), r"<u>\1</u>"),
    (re.compile(r"~~(.*?)~~"), r"<s>\1</s>"),
    (re.compile(r"`(.*?)`"), r"<code>\1</code>"),
    (re.compile(r"\[([^\]]+)\]\(([^)]+)\)"), r'<a href="\2">\1</a>'),
]


def convert_to_html(text: str) -> str:
    """
    Convierte markup ligero a HTML compatible con parse_mode=HTML de Telegram.

    Soporta **negrita**, *cursiva*, __subrayado__, ~~tachado~~, `código`
    y [texto](url). El resto del texto se deja intacto.
    """
    for pattern, replacement in _MARKUP_RULES:
        text = pattern.sub(replacement, text)
    return text
