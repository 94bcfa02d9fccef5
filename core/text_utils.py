import re

# Patterns to protect during translation (.NET format items, printf style, markup)
PLACEHOLDER_PATTERNS = [
    r'\{\{', r'\}\}',               # Escaped braces
    r'\{\d+(?:,-?\d+)?(?::[^{}]*)?\}',  # Composite format {0} {1,10} {0:N2}
    r'\{[A-Za-z_][\w.]*\}',         # Named placeholders {Name} {User.Name}
    r'%\([^)]+\)[sd]',              # Python style %(name)s %(count)d
    r'%\d*\$?[sdif@]',              # printf style %s %d %1$s
    r'<[^<>]+>',                    # Markup tags <b> </b> <br/>
    r'\\[nrt]',                     # Literal escape sequences
]

# Compiled pattern for efficiency
_TOKEN_REGEX = None


def _get_token_regex():
    """Get compiled regex for all placeholder patterns."""
    global _TOKEN_REGEX
    if _TOKEN_REGEX is None:
        combined = '|'.join(f'({p})' for p in PLACEHOLDER_PATTERNS)
        _TOKEN_REGEX = re.compile(combined)
    return _TOKEN_REGEX


def mask_placeholders(text: str):
    """
    Replace format placeholders with masked tokens ⟦T0⟧, ⟦T1⟧, etc.

    Args:
        text: Original text with placeholders

    Returns:
        Tuple of (masked_text, token_map) where token_map is {token: original}
    """
    if not text:
        return text, {}

    token_map = {}
    counter = [0]

    def replacer(match):
        token = f"⟦T{counter[0]}⟧"
        token_map[token] = match.group(0)
        counter[0] += 1
        return token

    masked_text = _get_token_regex().sub(replacer, text)
    return masked_text, token_map


def unmask_placeholders(text: str, token_map: dict) -> str:
    """
    Restore masked tokens back to the original placeholders.

    Engines sometimes insert spaces inside the brackets, so "⟦ T0 ⟧" is
    accepted as well.
    """
    if not text or not token_map:
        return text

    for token, original in token_map.items():
        name = token[1:-1]
        text = re.sub(rf"⟦\s*{name}\s*⟧", lambda _m, o=original: o, text)

    return text


def count_placeholders(text: str) -> int:
    """Number of placeholders in a text (used to sanity check results)."""
    if not text:
        return 0
    return len(_get_token_regex().findall(text))
