from accounting.core.coercion import format_number
from accounting.core.constants import COST_TYPE_LABELS, DESCRIPTION_LOCALES
from accounting.core.errors import ValidationError

_TEMPLATES = {
    "ar": {
        "receipt": "شراء {item} من {supplier} ({qty} {unit} × {price})",
        "issue": "صرف {item} لمشروع {project} ({qty} {unit} × {price})",
        "cost": "تكلفة {label} لمشروع {project}",
        "sale": "بيع وحدة {unit_no} من مشروع {project} إلى {buyer}",
    },
    "en": {
        "receipt": "Purchase of {item} from {supplier} ({qty} {unit} × {price})",
        "issue": "Issue of {item} to project {project} ({qty} {unit} × {price})",
        "cost": "{label} cost for project {project}",
        "sale": "Sale of unit {unit_no} in project {project} to {buyer}",
    },
}


def check_locale(locale: str) -> str:
    if locale not in DESCRIPTION_LOCALES:
        raise ValidationError(
            "Unsupported description locale {!r}; expected one of {}".format(
                locale, ", ".join(DESCRIPTION_LOCALES)
            )
        )
    return locale


def cost_type_label(cost_type: str, locale: str) -> str:
    labels = COST_TYPE_LABELS[check_locale(locale)]
    try:
        return labels[cost_type]
    except KeyError:
        raise ValidationError(f"Unknown cost type {cost_type!r}") from None


def receipt_description(item_name, unit, supplier, qty, unit_price, locale) -> str:
    return _TEMPLATES[check_locale(locale)]["receipt"].format(
        item=item_name,
        supplier=supplier,
        qty=format_number(qty),
        unit=unit,
        price=format_number(unit_price),
    )


def issue_description(item_name, unit, project, qty, unit_price, locale) -> str:
    return _TEMPLATES[check_locale(locale)]["issue"].format(
        item=item_name,
        project=project,
        qty=format_number(qty),
        unit=unit,
        price=format_number(unit_price),
    )


def cost_description(cost_type, project_name, locale) -> str:
    label = cost_type_label(cost_type, locale)
    if locale == "en":
        label = label[:1].upper() + label[1:]
    return _TEMPLATES[locale]["cost"].format(label=label, project=project_name)


def sale_description(unit_no, project_name, buyer, locale) -> str:
    return _TEMPLATES[check_locale(locale)]["sale"].format(
        unit_no=unit_no,
        project=project_name,
        buyer=buyer,
    )
