import io
from datetime import date
from typing import List

from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from mealhub.domain.MealSlot import MealSlot
from mealhub.domain.ShoppingListItem import ShoppingListItem
from mealhub.logic.planning.week_window import week_days
from mealhub.utilities.constants import DAYS, DISPLAY_DATE_FORMAT, MEAL_TYPES

_TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("ALIGN", (0, 0), (-1, -1), "CENTER"),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, 0), 12),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 10),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
])


def generate_pdf_for_week(start: date, slots: List[MealSlot], items: List[ShoppingListItem]) -> bytes:
    """Meal plan table (Day / Breakfast / Lunch / Dinner / Snack) followed by the shopping list.

    ``slots`` are expected to carry their joined recipe.
    """
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    days = week_days(start)
    elements = [
        Paragraph(
            f"Meal Plan - {days[0].strftime(DISPLAY_DATE_FORMAT)} to {days[-1].strftime(DISPLAY_DATE_FORMAT)}",
            styles["Title"],
        ),
        Spacer(1, 16),
    ]

    cells = {(s.day, s.meal_type): (s.recipe.title if s.recipe else "-") for s in slots}
    data = [["Day"] + [m.capitalize() for m in MEAL_TYPES]]
    for day_name, day_date in zip(DAYS, days):
        data.append(
            [f"{day_name} ({day_date.strftime(DISPLAY_DATE_FORMAT)})"]
            + [cells.get((day_name, m), "-") for m in MEAL_TYPES]
        )
    table = Table(data, repeatRows=1)
    table.setStyle(_TABLE_STYLE)
    elements.append(table)

    if items:
        elements += [Spacer(1, 24), Paragraph("Shopping List", styles["Heading2"]), Spacer(1, 8)]
        rows = [["Item", "Qty", "Recipe"]] + [[i.name, i.quantity, i.recipe_name] for i in items]
        shopping = Table(rows, repeatRows=1)
        shopping.setStyle(_TABLE_STYLE)
        elements.append(shopping)

    doc.build(elements)
    return buf.getvalue()
