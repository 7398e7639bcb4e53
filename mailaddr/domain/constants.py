from typing import Dict, Optional

# 開始文字 -> 対応する終了文字（None は単独で完結する演算子）
OPERATORS: Dict[str, Optional[str]] = {
    '"': '"',
    "(": ")",
    "<": ">",
    ",": None,
    ":": ";",
    ";": None,
}

ESCAPE_CHAR = "\\"

# トップレベルでアドレス候補を区切る演算子
SEPARATORS = (",", ";")

QUOTE_CHARS = ('"', "'")
