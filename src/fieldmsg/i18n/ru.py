"""Russian message catalog.

Seed templates for the standard validation rules, the application's own
rules and the field-name aliases used by the application's request
models.
"""

from __future__ import annotations

from functools import lru_cache

from fieldmsg.i18n.catalogs import CatalogBuilder, TemplateCatalog
from fieldmsg.i18n.protocols import PluralCategory
from fieldmsg.types import KindFamily

_ONE = PluralCategory.ONE
_FEW = PluralCategory.FEW
_MANY = PluralCategory.MANY
_OTHER = PluralCategory.OTHER

# Pluralized unit nouns, shared by every count-bearing rule
_RUSSIAN_UNITS: dict[KindFamily, dict[PluralCategory, str]] = {
    KindFamily.STRING: {
        _ONE: "{0} символ",
        _FEW: "{0} символа",
        _MANY: "{0} символов",
        _OTHER: "{0} символы",
    },
    KindFamily.ITEMS: {
        _ONE: "{0} элемент",
        _FEW: "{0} элемента",
        _MANY: "{0} элементов",
        _OTHER: "{0} элементы",
    },
}

# Count-bearing rules: sentence per kind family
_RUSSIAN_MAGNITUDE: dict[str, dict[KindFamily, str]] = {
    "len": {
        KindFamily.STRING: "Поле {0} должно быть длиной в {1}",
        KindFamily.NUMBER: "Поле {0} должно быть равно {1}",
        KindFamily.ITEMS: "Поле {0} должно содержать {1}",
    },
    "min": {
        KindFamily.STRING: "Поле {0} должно содержать минимум {1}",
        KindFamily.NUMBER: "Поле {0} должно быть больше или равно {1}",
        KindFamily.ITEMS: "Поле {0} должно содержать минимум {1}",
    },
    "max": {
        KindFamily.STRING: "Поле {0} должно содержать максимум {1}",
        KindFamily.NUMBER: "Поле {0} должно быть меньше или равно {1}",
        KindFamily.ITEMS: "Поле {0} должно содержать максимум {1}",
    },
    "lt": {
        KindFamily.STRING: "Поле {0} должно иметь менее {1}",
        KindFamily.NUMBER: "Поле {0} должно быть менее {1}",
        KindFamily.ITEMS: "Поле {0} должно содержать менее {1}",
        KindFamily.DATETIME: "{0} должно быть меньше текущей даты и времени",
    },
    "lte": {
        KindFamily.STRING: "Поле {0} должно содержать максимум {1}",
        KindFamily.NUMBER: "Поле {0} должно быть менее или равно {1}",
        KindFamily.ITEMS: "Поле {0} должно содержать максимум {1}",
        KindFamily.DATETIME: "{0} должно быть меньше или равно текущей дате и времени",
    },
    "gt": {
        KindFamily.STRING: "Поле {0} должно быть длиннее {1}",
        KindFamily.NUMBER: "Поле {0} должно быть больше {1}",
        KindFamily.ITEMS: "Поле {0} должно содержать более {1}",
        KindFamily.DATETIME: "{0} должна быть позже текущего момента",
    },
    "gte": {
        KindFamily.STRING: "Поле {0} должно содержать минимум {1}",
        KindFamily.NUMBER: "Поле {0} должно быть больше или равно {1}",
        KindFamily.ITEMS: "Поле {0} должно содержать минимум {1}",
        KindFamily.DATETIME: "{0} должна быть позже или равна текущему моменту",
    },
}

# Values that are neither text nor collections use the number sentence
_NUMBER_DEFAULT_RULES = frozenset({"len", "min", "max"})

# Rules rendered from the field name and the raw parameter
_RUSSIAN_SCALAR: dict[str, str] = {
    # Comparisons against a value
    "eq": "{0} не равен {1}",
    "ne": "Поле {0} должно быть не равно {1}",
    "oneof": "Поле {0} должно быть одним из [{1}]",

    # Comparisons against another field
    "eqfield": "Поле {0} должно быть равно {1}",
    "eqcsfield": "Поле {0} должно быть равно {1}",
    "necsfield": "{0} не должен быть равно {1}",
    "gtcsfield": "Поле {0} должно быть больше {1}",
    "gtecsfield": "Поле {0} должно быть больше или равно {1}",
    "ltcsfield": "Поле {0} должно быть менее {1}",
    "ltecsfield": "Поле {0} должно быть менее или равно {1}",
    "nefield": "Поле {0} не должен быть равно {1}",
    "gtfield": "Поле {0} должно быть больше {1}",
    "gtefield": "Поле {0} должно быть больше или равно {1}",
    "ltfield": "Поле {0} должно быть менее {1}",
    "ltefield": "Поле {0} должно быть менее или равно {1}",

    # Substring checks
    "contains": "Поле {0} должно содержать текст '{1}'",
    "containsany": "Поле {0} должно содержать минимум один из символов '{1}'",
    "excludes": "Поле {0} не должно содержать текст '{1}'",
    "excludesall": "Поле {0} не должно содержать символы '{1}'",
    "excludesrune": "Поле {0} не должно содержать '{1}'",

    # Presence and format checks (no parameter)
    "required": "{0} обязательное поле",
    "alpha": "Поле {0} должно содержать только буквы",
    "alphanum": "Поле {0} должно содержать только буквы и цифры",
    "numeric": "Поле {0} должно быть цифровым значением",
    "number": "Поле {0} должно быть цифрой",
    "hexadecimal": "Поле {0} должно быть шестнадцатеричной строкой",
    "hexcolor": "Поле {0} должно быть HEX цветом",
    "rgb": "Поле {0} должно быть RGB цветом",
    "rgba": "Поле {0} должно быть RGBA цветом",
    "hsl": "Поле {0} должно быть HSL цветом",
    "hsla": "Поле {0} должно быть HSLA цветом",
    # Kept as shipped: the sentence ends in English
    "e164": "Поле {0} должно быть E.164 formatted phone number",
    "email": "Поле {0} должно быть email адресом",
    "url": "Поле {0} должно быть URL",
    "uri": "Поле {0} должно быть URI",
    "base64": "Поле {0} должно быть Base64 строкой",
    "isbn": "Поле {0} должно быть ISBN номером",
    "isbn10": "Поле {0} должно быть ISBN-10 номером",
    "isbn13": "Поле {0} должно быть ISBN-13 номером",
    "uuid": "Поле {0} должно быть UUID",
    "uuid3": "Поле {0} должно быть UUID 3 версии",
    "uuid4": "Поле {0} должно быть UUID 4 версии",
    "uuid5": "Поле {0} должно быть UUID 5 версии",
    "ascii": "Поле {0} должно содержать только ascii символы",
    "printascii": "Поле {0} должно содержать только доступные для печати ascii символы",
    "multibyte": "Поле {0} должно содержать мультибайтные символы",
    "datauri": "Поле {0} должно содержать Data URI",
    "latitude": "Поле {0} должно содержать координаты широты",
    "longitude": "Поле {0} должно содержать координаты долготы",
    "ssn": "Поле {0} должно быть SSN номером",
    "ipv4": "Поле {0} должно быть IPv4 адресом",
    "ipv6": "Поле {0} должно быть IPv6 адресом",
    "ip": "Поле {0} должно быть IP адресом",
    "cidr": "Поле {0} должно содержать CIDR обозначения",
    "cidrv4": "Поле {0} должно содержать CIDR обозначения для IPv4 адреса",
    "cidrv6": "Поле {0} должно содержать CIDR обозначения для IPv6 адреса",
    "tcp_addr": "Поле {0} должно быть TCP адресом",
    "tcp4_addr": "Поле {0} должно быть IPv4 TCP адресом",
    "tcp6_addr": "Поле {0} должно быть IPv6 TCP адресом",
    "udp_addr": "Поле {0} должно быть UDP адресом",
    "udp4_addr": "Поле {0} должно быть IPv4 UDP адресом",
    "udp6_addr": "Поле {0} должно быть IPv6 UDP адресом",
    "ip_addr": "Поле {0} должно быть распознаваемым IP адресом",
    "ip4_addr": "Поле {0} должно быть распознаваемым IPv4 адресом",
    "ip6_addr": "Поле {0} должно быть распознаваемым IPv6 адресом",
    "unix_addr": "Поле {0} должно быть распознаваемым UNIX адресом",
    "mac": "Поле {0} должно содержать MAC адрес",
    "unique": "Поле {0} должно содержать уникальные значения",
    "iscolor": "Поле {0} должно быть цветом",

    # Application rules
    "dateInFuture": "Дата и время не могут быть в прошлом",
    "existedEventsParams": "Недопустимые параметры события",
    "fileAccessType": "Недопустимый тип доступа к файлу",
    "starRating": "Недопустимая оценка",
    "userExistsInLdap": "Пользователь не найден в LDAP",
}

# Display labels for request model fields
_RUSSIAN_FIELD_LABELS: dict[str, str] = {
    "Title": "Название",
    "Description": "Описание",
    "FileName": "Имя файла",
    "FileAccess": "Доступ файла",
    "StartAt": "Время начала",
    "EndAt": "Время окончания",
    "EventID": "ID события",
    "UserID": "ID пользователя",
    "Message": "Сообщение",
    "Page": "Страница",
    "Limit": "Лимит",
    "Source": "Источник",
    "ModeratorEmails": "Модераторы",
    "Params": "Параметры",
    "Device": "Устройство",
    "Os": "Операционная система",
    "Browser": "Браузер",
    "Status": "Статус",
    "Link": "Ссылка",
    "ScheduleID": "ID расписания",
    "City": "Город",
    "Rating": "Оценка",
    "Type": "Тип",
    "Login": "Логин",
    "Password": "Пароль",
    "ParticipantsEmails": "Спикеры",
}


@lru_cache(maxsize=None)
def get_russian_catalog() -> TemplateCatalog:
    """Get the Russian catalog.

    Built once per process; the catalog is immutable and shared.
    """
    builder = CatalogBuilder("ru").with_metadata(language="Russian", native_name="Русский")

    for rule, sentences in _RUSSIAN_MAGNITUDE.items():
        units = {family: forms for family, forms in _RUSSIAN_UNITS.items() if family in sentences}
        builder.add_magnitude(
            rule,
            sentences=sentences,
            units=units,
            default_family=KindFamily.NUMBER if rule in _NUMBER_DEFAULT_RULES else None,
        )

    builder.add_scalars(_RUSSIAN_SCALAR)
    builder.add_field_labels(_RUSSIAN_FIELD_LABELS)
    return builder.build()
