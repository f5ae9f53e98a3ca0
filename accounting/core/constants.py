DESCRIPTION_LOCALES = ("ar", "en")
DEFAULT_DESCRIPTION_LOCALE = "ar"

COST_TYPE_LABELS = {
    "ar": {
        "construction": "إنشاء",
        "operation": "تشغيل",
        "expense": "مصروفات",
    },
    "en": {
        "construction": "construction",
        "operation": "operation",
        "expense": "general expense",
    },
}
