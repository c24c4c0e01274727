"""User-facing messages in the configured locale.

Only messages that reach end users through access-control and guest-code
responses are localized. Everything else is English.
"""

from typing import Optional

from familytree.core.config import settings
from familytree.core.config.enums import Locale

_CATALOG: dict[str, dict[Locale, str]] = {
    "forbidden": {
        Locale.EN: "You do not have permission to perform this action",
        Locale.VI: "Bạn không có quyền thực hiện thao tác này",
    },
    "own_profile_only": {
        Locale.EN: "You can only edit your own profile",
        Locale.VI: "Bạn chỉ có thể sửa hồ sơ của mình",
    },
    "access_code_required": {
        Locale.EN: "Access code is required",
        Locale.VI: "Mã truy cập là bắt buộc",
    },
    "access_code_invalid": {
        Locale.EN: "Invalid access code",
        Locale.VI: "Mã truy cập không hợp lệ",
    },
    "access_code_unknown": {
        Locale.EN: "Access code not found",
        Locale.VI: "Không tìm thấy mã truy cập",
    },
    "access_code_expired": {
        Locale.EN: "Access code has expired, please contact the tree administrator",
        Locale.VI: "Mã đã hết hạn, vui lòng liên hệ quản trị viên",
    },
    "access_code_issued": {
        Locale.EN: "Access code created",
        Locale.VI: "Đã tạo mã truy cập",
    },
    "access_code_active": {
        Locale.EN: "An active access code already exists",
        Locale.VI: "Mã truy cập vẫn còn hiệu lực",
    },
}


def message(key: str, locale: Optional[Locale] = None) -> str:
    """Look up ``key`` in the catalog, falling back to English."""
    entry = _CATALOG[key]
    return entry.get(locale or settings.LOCALE, entry[Locale.EN])
