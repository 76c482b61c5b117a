"""
Predefined Formats — Готовые символьные форматы
"""

from typing import Final

# ISO-8601 без offset
# Пример: 2012-12-12T12:12:12.000000
ISO8601: Final[str] = "YYYY-MM-DDTHH:mm:ss.S"

# ISO-8601 с offset
# Пример (UTC): 2012-12-12T12:12:12.000000Z
# Пример (Europe/Berlin, лето): 2012-07-12T12:12:12.000000+0200
ISO8601_TZ: Final[str] = "YYYY-MM-DDTHH:mm:ss.SZ"

# ctime (C locale)
# Пример: Sat Jan 19 18:26:50 2019
CTIME: Final[str] = "ddd MMM DD HH:mm:ss YYYY"
