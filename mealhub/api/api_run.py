from fastapi import (
    FastAPI,
    Request,
    Query,
    Form,
    Depends,
    Response,
)
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from datetime import datetime, timedelta, date as _date
from typing import Optional
import logging

from mealhub.api.dependencies import (
    current_user,
    current_user_optional,
    get_recipes,
    get_slots,
    get_users,
)
from mealhub.domain.User import User
from mealhub.domain.errors import MealHubError, ValidationError
from mealhub.infra.Document_Store import DocumentStore
from mealhub.infra.MealSlot_Repository import MealSlotRepository
from mealhub.infra.Recipe_Repository import RecipeRepository
from mealhub.infra.User_Repository import UserRepository
from mealhub.infra.pdf_utils import generate_pdf_for_week
from mealhub.logic.planning.week_window import date_for_day, parse_date, resolve_week, week_days
from mealhub.logic.shopping.list_builder import generate_shopping_list, group_by_category
from mealhub.utilities.config import DATA_DIR, DEBUG, STATIC_DIR, TEMPLATES_DIR, UPLOADS_DIR
from mealhub.utilities.constants import DAYS, DISPLAY_DATE_FORMAT, MEAL_TYPES, STORE_DATE_FORMAT
from mealhub.utilities.validators import MealSlotInput

# Routers
from mealhub.api.routes import auth, bookmarks, recipes, upload
from mealhub.api.api_ai import router as ai_router
from mealhub.api.routes.recipes import with_author_name

# Logging
logger = logging.getLogger("mealhub")

# Initialize FastAPI app
app = FastAPI(title="MealHub - Recipes & Meal Planner API", debug=DEBUG)
app.state.store = DocumentStore(DATA_DIR)
app.state.ai_client = None

# Include routers
app.include_router(recipes.router)
app.include_router(bookmarks.router)
app.include_router(auth.router)
app.include_router(upload.router)
app.include_router(ai_router)

# Static files
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.mount("/uploads", StaticFiles(directory=str(UPLOADS_DIR)), name="uploads")

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


# -------------------- Error handling --------------------
def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(MealHubError)
async def mealhub_error_handler(request: Request, exc: MealHubError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return _error(400, message.removeprefix("Value error, "))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error")


# -------------------- Helpers --------------------
def _reference_date(value: Optional[str]) -> _date:
    """Explicit reference date from a query parameter; today when absent."""
    return parse_date(value) if value else _date.today()


def _ts() -> int:
    """Cache-busting timestamp for static assets."""
    return int(datetime.now().timestamp())


# -------------------- API: Meal plans --------------------
@app.get("/api/meal-plans")
def api_list_meal_plans(start: Optional[str] = Query(default=None),
                        end: Optional[str] = Query(default=None),
                        user: User = Depends(current_user),
                        slots: MealSlotRepository = Depends(get_slots)):
    if not start or not end:
        raise ValidationError("Start and end dates are required")
    found = slots.list_in_range(user.id, parse_date(start), parse_date(end), with_recipes=True)
    return {"success": True, "mealPlans": [s.to_dict() for s in found]}


@app.post("/api/meal-plans", status_code=201)
def api_create_meal_plan(payload: MealSlotInput,
                         user: User = Depends(current_user),
                         slots: MealSlotRepository = Depends(get_slots)):
    planned_for = parse_date(payload.planned_for) if payload.planned_for else None
    slot = slots.create(user.id, payload.day, payload.meal_type, payload.recipe_id, planned_for)
    return {"success": True, "mealPlanId": slot.id, "message": "Meal plan created successfully"}


@app.get("/api/meal-plans/export")
def api_export_week(date: Optional[str] = Query(default=None),
                    user: User = Depends(current_user),
                    slots: MealSlotRepository = Depends(get_slots),
                    recipes: RecipeRepository = Depends(get_recipes)):
    reference = _reference_date(date)
    start, end = resolve_week(reference)
    week_slots = slots.list_in_range(user.id, start, end, with_recipes=True)
    items = generate_shopping_list(user.id, reference, slots=slots, recipes=recipes)
    pdf_bytes = generate_pdf_for_week(start, week_slots, items)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="meal_plan_{start.strftime(STORE_DATE_FORMAT)}.pdf"'},
    )


@app.delete("/api/meal-plans/{slot_id}")
def api_delete_meal_plan(slot_id: str, user: User = Depends(current_user),
                         slots: MealSlotRepository = Depends(get_slots)):
    slots.delete(slot_id, user.id)
    return {"success": True, "message": "Meal plan deleted successfully"}


# -------------------- API: Shopping List (JSON) --------------------
@app.get("/api/shopping-list")
def api_shopping_list(date: Optional[str] = Query(default=None),
                      user: User = Depends(current_user),
                      slots: MealSlotRepository = Depends(get_slots),
                      recipes: RecipeRepository = Depends(get_recipes)):
    # Defaults to the current calendar week, independent of the planner's view
    reference = _reference_date(date)
    start, end = resolve_week(reference)
    items = generate_shopping_list(user.id, reference, slots=slots, recipes=recipes)
    return {
        "success": True,
        "weekStart": start.strftime(STORE_DATE_FORMAT),
        "weekEnd": end.strftime(STORE_DATE_FORMAT),
        "items": [i.to_dict() for i in items],
        "count": len(items),
    }


# -------------------- UI PAGES --------------------
@app.get("/", response_class=HTMLResponse)
def main_page(request: Request,
              user: Optional[User] = Depends(current_user_optional),
              recipes: RecipeRepository = Depends(get_recipes)):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "user": user,
            "recent": recipes.list_recent(limit=12),
            "popular": recipes.list_popular(limit=6),
            "time": _ts(),
        },
    )


@app.get("/recipes/{recipe_id}", response_class=HTMLResponse)
def recipe_detail(request: Request, recipe_id: str,
                  user: Optional[User] = Depends(current_user_optional),
                  recipes: RecipeRepository = Depends(get_recipes),
                  users: UserRepository = Depends(get_users)):
    recipe = with_author_name(recipes.get_by_id(recipe_id), users)
    return templates.TemplateResponse(
        request, "recipe_detail.html", {"user": user, "recipe": recipe, "time": _ts()}
    )


@app.get("/meal-planner", response_class=HTMLResponse)
def meal_planner_page(request: Request, date: Optional[str] = Query(default=None),
                      user: Optional[User] = Depends(current_user_optional),
                      slots: MealSlotRepository = Depends(get_slots),
                      recipes: RecipeRepository = Depends(get_recipes)):
    reference = _reference_date(date)
    start, end = resolve_week(reference)
    grid = {}
    if user is not None:
        for slot in slots.list_in_range(user.id, start, end, with_recipes=True):
            grid[(slot.day, slot.meal_type)] = slot
    days = [
        {"name": name, "date": d, "label": d.strftime(DISPLAY_DATE_FORMAT)}
        for name, d in zip(DAYS, week_days(start))
    ]
    return templates.TemplateResponse(
        request,
        "meal_planner.html",
        {
            "user": user,
            "days": days,
            "meal_types": MEAL_TYPES,
            "grid": grid,
            "recipes": recipes.list_recent(limit=100) if user else [],
            "week_start": start,
            "week_end": end,
            "prev_week": (start - timedelta(days=7)).strftime(STORE_DATE_FORMAT),
            "next_week": (start + timedelta(days=7)).strftime(STORE_DATE_FORMAT),
            "date_format": DISPLAY_DATE_FORMAT,
            "time": _ts(),
        },
    )


@app.post("/meal-planner/assign")
def assign_meal(day: str = Form(""), meal_type: str = Form(""), recipe_id: str = Form(""),
                week: str = Form(""),
                user: User = Depends(current_user),
                slots: MealSlotRepository = Depends(get_slots)):
    if meal_type and meal_type not in MEAL_TYPES:
        raise ValidationError("Invalid day or meal")
    reference = parse_date(week) if week else _date.today()
    planned_for = date_for_day(reference, day) if day else None
    slots.create(user.id, day, meal_type, recipe_id, planned_for)
    return RedirectResponse(url=f"/meal-planner?date={reference.strftime(STORE_DATE_FORMAT)}", status_code=303)


@app.post("/meal-planner/remove/{slot_id}")
def remove_meal(slot_id: str, week: str = Form(""),
                user: User = Depends(current_user),
                slots: MealSlotRepository = Depends(get_slots)):
    slots.delete(slot_id, user.id)
    target = f"/meal-planner?date={week}" if week else "/meal-planner"
    return RedirectResponse(url=target, status_code=303)


@app.get("/shopping-list", response_class=HTMLResponse)
def shopping_list_page(request: Request,
                       user: Optional[User] = Depends(current_user_optional),
                       slots: MealSlotRepository = Depends(get_slots),
                       recipes: RecipeRepository = Depends(get_recipes)):
    today = _date.today()
    start, end = resolve_week(today)
    items = generate_shopping_list(user.id, today, slots=slots, recipes=recipes) if user else []
    return templates.TemplateResponse(
        request,
        "shopping_list.html",
        {
            "user": user,
            "groups": group_by_category(items),
            "total_items": len(items),
            "week_start": start.strftime(DISPLAY_DATE_FORMAT),
            "week_end": end.strftime(DISPLAY_DATE_FORMAT),
            "time": _ts(),
        },
    )
