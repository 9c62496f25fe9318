"""CLI interface using Typer."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pantrychef.config.settings import Settings
from pantrychef.db.connection import DatabaseConnection
from pantrychef.errors import PantryChefError
from pantrychef.planner.meal_allocator import DailyMealPlan, format_plan_text, plan_to_dict
from pantrychef.profiles.body_calc import targets_to_dict
from pantrychef.recipes.models import GeneratedRecipe, RecipeRequest
from pantrychef.recipes.prompt import build_meal_plan_prompt, build_recipe_prompt
from pantrychef.services import Services

app = typer.Typer(
    help="Personal chef: nutrition targets, meal plans, pantry and meal tracking",
    no_args_is_help=True,
)
console = Console()

# Subcommand groups
profile_app = typer.Typer(help="Manage your body profile and targets")
plan_app = typer.Typer(help="Generate daily meal plans")
recipe_app = typer.Typer(help="Generate recipes, manage favorites and feedback")
pantry_app = typer.Typer(help="Manage pantry items")
meals_app = typer.Typer(help="Log meals and view today's intake")
weight_app = typer.Typer(help="Log and list body weight")

app.add_typer(profile_app, name="profile")
app.add_typer(plan_app, name="plan")
app.add_typer(recipe_app, name="recipe")
app.add_typer(pantry_app, name="pantry")
app.add_typer(meals_app, name="meals")
app.add_typer(weight_app, name="weight")


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict) -> None:
    """Output JSON response to stdout."""
    print(json.dumps(response, indent=2))


def fail(command: str, message: str, json_output: bool) -> NoReturn:
    """Report an error and exit with status 1."""
    if json_output:
        output_json({"success": False, "command": command, "errors": [message]})
    else:
        console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def configure_logging(level: str) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def get_services(ctx: typer.Context) -> Services:
    return ctx.obj


def use_json(ctx: typer.Context, json_output: bool) -> bool:
    """--json, or JSON configured as the default output format."""
    return json_output or get_services(ctx).settings.defaults.output_format == "json"


def parse_date(value: Optional[str], command: str, json_output: bool) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        fail(command, f"Invalid date '{value}', expected YYYY-MM-DD", json_output)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", help="Path to config.yaml"
    ),
    db_path: Optional[Path] = typer.Option(
        None, "--db", help="Custom database path"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
) -> None:
    """Wire settings, database and services for the invoked command."""
    settings = Settings.load(config)
    configure_logging("DEBUG" if verbose else settings.logging.level)

    db = DatabaseConnection(db_path or settings.database.path)
    db.initialize_schema()
    ctx.obj = Services.create(db, settings)


# ============================================================================
# Profile Commands
# ============================================================================


@profile_app.command("set")
def profile_set(
    ctx: typer.Context,
    weight: Optional[float] = typer.Option(None, "--weight", help="Weight in kg"),
    height: Optional[float] = typer.Option(None, "--height", help="Height in cm"),
    age: Optional[int] = typer.Option(None, "--age", help="Age in years"),
    gender: Optional[str] = typer.Option(None, "--gender", help="male/female"),
    activity: Optional[str] = typer.Option(
        None,
        "--activity",
        help="sedentary/lightly_active/moderately_active/very_active/extra_active",
    ),
    goal: Optional[str] = typer.Option(None, "--goal", help="maintain/lose/gain"),
    restrictions: Optional[str] = typer.Option(
        None, "--restrictions", help="Dietary restrictions, e.g. 'vegetarian, gluten-free'"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Update profile fields and recalculate targets."""
    json_output = use_json(ctx, json_output)
    services = get_services(ctx)
    profile = services.profiles.get_profile()

    updates = {
        "weight": weight,
        "height": height,
        "age": age,
        "gender": gender.lower() if gender else None,
        "activity_level": activity.lower() if activity else None,
        "goal": goal.lower() if goal else None,
        "dietary_restrictions": restrictions,
    }
    for field_name, value in updates.items():
        if value is not None:
            setattr(profile, field_name, value)

    try:
        targets = services.profiles.save_profile(profile)
    except PantryChefError as e:
        fail("profile set", str(e), json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "profile set",
            "data": targets_to_dict(profile, targets),
            "human_summary": f"Profile saved, {targets.calorie_target} kcal/day",
        })
    else:
        console.print("[green]Profile saved[/green]")
        console.print(targets.summary())


@profile_app.command("show")
def profile_show(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the saved profile."""
    json_output = use_json(ctx, json_output)
    profile = get_services(ctx).profiles.get_profile()

    if json_output:
        output_json({
            "success": True,
            "command": "profile show",
            "data": {
                "weight_kg": profile.weight,
                "height_cm": profile.height,
                "age": profile.age,
                "gender": profile.gender,
                "activity_level": profile.activity_level,
                "goal": profile.goal,
                "dietary_restrictions": profile.dietary_restrictions,
            },
            "human_summary": f"{profile.gender}, {profile.age}y, {profile.weight}kg",
        })
    else:
        console.print("[bold]Profile[/bold]")
        console.print(f"  Weight: {profile.weight} kg")
        console.print(f"  Height: {profile.height} cm")
        console.print(f"  Age: {profile.age}")
        console.print(f"  Gender: {profile.gender}")
        console.print(f"  Activity: {profile.activity_level}")
        console.print(f"  Goal: {profile.goal}")
        if profile.dietary_restrictions:
            console.print(f"  Restrictions: {profile.dietary_restrictions}")


@profile_app.command("targets")
def profile_targets(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show daily calorie and macro targets."""
    json_output = use_json(ctx, json_output)
    services = get_services(ctx)
    profile = services.profiles.get_profile()
    targets = services.profiles.get_targets()

    if json_output:
        output_json({
            "success": True,
            "command": "profile targets",
            "data": targets_to_dict(profile, targets),
            "human_summary": targets.summary(),
        })
        return

    if not targets.is_established:
        console.print(f"[yellow]{targets.summary()}[/yellow]")
        return

    table = Table(title="Daily Targets")
    table.add_column("Nutrient", style="cyan")
    table.add_column("Target", justify="right")
    table.add_row("Calories", f"{targets.calorie_target} kcal")
    table.add_row("Protein", f"{targets.protein_target} g")
    table.add_row("Carbs", f"{targets.carb_target} g")
    table.add_row("Fat", f"{targets.fat_target} g")
    console.print(table)


# ============================================================================
# Meal Plan Commands
# ============================================================================


def print_plan(plan: DailyMealPlan) -> None:
    table = Table(title=f"Meal Plan for {plan.date}")
    table.add_column("Meal", style="cyan")
    table.add_column("Recipe")
    table.add_column("kcal", justify="right")
    table.add_column("Protein", justify="right")
    table.add_column("Carbs", justify="right")
    table.add_column("Fat", justify="right")

    for meal in plan.meals:
        table.add_row(
            meal.meal_type,
            meal.recipe_name,
            str(meal.calories),
            f"{meal.protein}g",
            f"{meal.carbs}g",
            f"{meal.fat}g",
        )
    table.add_row(
        "[bold]Total[/bold]",
        "",
        str(plan.total_calories),
        f"{plan.total_protein}g",
        f"{plan.total_carbs}g",
        f"{plan.total_fat}g",
    )
    console.print(table)


@plan_app.command("generate")
def plan_generate(
    ctx: typer.Context,
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    markdown: bool = typer.Option(False, "--markdown", help="Output as markdown"),
    show_prompt: bool = typer.Option(
        False, "--show-prompt", help="Also print the prompt a model backend would receive"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Split today's targets across breakfast, lunch, snack and dinner."""
    json_output = use_json(ctx, json_output)
    services = get_services(ctx)
    plan_date = parse_date(date_str, "plan generate", json_output)

    try:
        plan = services.plans.generate_daily_plan(plan_date)
    except PantryChefError as e:
        fail("plan generate", str(e), json_output)

    prompt = None
    if show_prompt:
        profile = services.profiles.get_profile()
        prompt = build_meal_plan_prompt(profile, services.profiles.get_targets())

    if json_output:
        data = plan_to_dict(plan)
        if prompt is not None:
            data["prompt"] = prompt
        output_json({
            "success": True,
            "command": "plan generate",
            "data": data,
            "human_summary": f"Meal plan for {plan.date}: {plan.total_calories} kcal",
        })
        return

    if markdown or services.settings.defaults.output_format == "markdown":
        console.print(format_plan_text(plan))
    else:
        print_plan(plan)

    if prompt is not None:
        console.print(Panel(Text(prompt), title="Prompt"))


@plan_app.command("show")
def plan_show(
    ctx: typer.Context,
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show a previously generated plan."""
    json_output = use_json(ctx, json_output)
    plan_date = parse_date(date_str, "plan show", json_output)
    plan = get_services(ctx).plans.get_plan(plan_date)

    if plan is None:
        fail("plan show", "No meal plan found for that date", json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "plan show",
            "data": plan_to_dict(plan),
            "human_summary": f"Meal plan for {plan.date}",
        })
    else:
        print_plan(plan)


# ============================================================================
# Recipe Commands
# ============================================================================


def print_recipe(recipe: GeneratedRecipe) -> None:
    title = recipe.recipe_name
    if recipe.is_favorite:
        title += " [yellow]★[/yellow]"
    lines = [
        recipe.description,
        "",
        f"Prep: {recipe.prep_time_minutes} min | Cook: {recipe.cook_time_minutes} min"
        f" | Servings: {recipe.servings}",
        "",
        "[bold]Ingredients[/bold]",
        *[f"  - {item}" for item in recipe.ingredients],
        "",
        "[bold]Instructions[/bold]",
        *[f"  {i}. {step}" for i, step in enumerate(recipe.instructions, start=1)],
    ]
    info = recipe.nutritional_info
    if info:
        lines += [
            "",
            f"[bold]Nutrition[/bold]: {info.calories} kcal | P {info.protein_grams}g"
            f" | C {info.carbs_grams}g | F {info.fat_grams}g",
        ]
    if recipe.notes:
        lines += ["", f"[dim]{recipe.notes}[/dim]"]
    lines += ["", f"[dim]id: {recipe.recipe_id}[/dim]"]
    console.print(Panel("\n".join(lines), title=title))


@recipe_app.command("generate")
def recipe_generate(
    ctx: typer.Context,
    meal_type: str = typer.Option("dinner", "--meal-type", "-m", help="Meal type"),
    cuisine: str = typer.Option("", "--cuisine", "-c", help="Cuisine preference"),
    cooking_time: str = typer.Option("", "--time", help="Target cooking time in minutes"),
    servings: int = typer.Option(1, "--servings", "-s", min=1, help="Number of servings"),
    exclude: str = typer.Option("", "--exclude", help="Ingredients to avoid"),
    include: str = typer.Option("", "--include", help="Ingredients to use"),
    spice: str = typer.Option("mild", "--spice", help="Spice level"),
    method: str = typer.Option("", "--method", help="Cooking method"),
    meal_prep: bool = typer.Option(False, "--meal-prep", help="Optimize for batch cooking"),
    refine: Optional[str] = typer.Option(
        None, "--refine", help="Recipe id to refine into an alternative"
    ),
    show_prompt: bool = typer.Option(
        False, "--show-prompt", help="Also print the prompt a model backend would receive"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Generate a recipe that fits your remaining calories today."""
    json_output = use_json(ctx, json_output)
    services = get_services(ctx)

    try:
        previous = services.recipes.get_recipe(refine).recipe_name if refine else None
        request = RecipeRequest(
            meal_type=meal_type,
            cuisine_preference=cuisine,
            cooking_time=cooking_time,
            servings=servings,
            excluded_ingredients=exclude,
            included_ingredients=include,
            spice_level=spice,
            cooking_method=method,
            meal_prep_focus=meal_prep,
            refine=refine is not None,
            previous_recipe_name=previous,
        )
        recipe = services.recipes.generate_recipe(request)
    except PantryChefError as e:
        fail("recipe generate", str(e), json_output)

    prompt = build_recipe_prompt(services.recipes.build_context(request)) if show_prompt else None

    if json_output:
        data = recipe.to_dict()
        if prompt is not None:
            data["prompt"] = prompt
        output_json({
            "success": True,
            "command": "recipe generate",
            "data": data,
            "human_summary": f"Generated '{recipe.recipe_name}'",
        })
        return

    print_recipe(recipe)
    if prompt is not None:
        console.print(Panel(Text(prompt), title="Prompt"))


@recipe_app.command("favorite")
def recipe_favorite(
    ctx: typer.Context,
    recipe_id: str = typer.Argument(..., help="Recipe id"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Toggle a recipe's favorite status."""
    json_output = use_json(ctx, json_output)
    services = get_services(ctx)
    try:
        recipe = services.recipes.get_recipe(recipe_id)
        is_favorite = services.recipes.toggle_favorite(recipe)
    except PantryChefError as e:
        fail("recipe favorite", str(e), json_output)

    summary = (
        f"Added '{recipe.recipe_name}' to favorites"
        if is_favorite
        else f"Removed '{recipe.recipe_name}' from favorites"
    )
    if json_output:
        output_json({
            "success": True,
            "command": "recipe favorite",
            "data": {"recipe_id": recipe.recipe_id, "is_favorite": is_favorite},
            "human_summary": summary,
        })
    else:
        console.print(f"[green]{summary}[/green]")


@recipe_app.command("favorites")
def recipe_favorites(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List favorite recipes."""
    json_output = use_json(ctx, json_output)
    favorites = get_services(ctx).recipes.favorites()

    if json_output:
        output_json({
            "success": True,
            "command": "recipe favorites",
            "data": {"recipes": [r.to_dict() for r in favorites]},
            "human_summary": f"{len(favorites)} favorite recipe(s)",
        })
        return

    if not favorites:
        console.print("No favorite recipes yet")
        return

    table = Table(title="Favorite Recipes")
    table.add_column("ID", style="dim")
    table.add_column("Recipe", style="cyan")
    table.add_column("kcal", justify="right")
    for recipe in favorites:
        info = recipe.nutritional_info
        table.add_row(recipe.recipe_id, recipe.recipe_name, str(info.calories) if info else "-")
    console.print(table)


@recipe_app.command("feedback")
def recipe_feedback(
    ctx: typer.Context,
    recipe_id: str = typer.Argument(..., help="Recipe id"),
    rating: int = typer.Option(0, "--rating", "-r", help="Rating 1-5"),
    comment: str = typer.Option("", "--comment", help="Free-text feedback"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Rate or comment on a generated recipe."""
    json_output = use_json(ctx, json_output)
    services = get_services(ctx)
    try:
        recipe = services.recipes.get_recipe(recipe_id)
        entry = services.recipes.submit_feedback(recipe, rating, comment)
    except PantryChefError as e:
        fail("recipe feedback", str(e), json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "recipe feedback",
            "data": {"feedback_id": entry.feedback_id, "recipe_id": entry.recipe_id},
            "human_summary": "Feedback submitted successfully!",
        })
    else:
        console.print("[green]Feedback submitted successfully![/green]")


@recipe_app.command("log")
def recipe_log(
    ctx: typer.Context,
    recipe_id: str = typer.Argument(..., help="Recipe id"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log a generated recipe as eaten today."""
    json_output = use_json(ctx, json_output)
    services = get_services(ctx)
    try:
        recipe = services.recipes.get_recipe(recipe_id)
        meal = services.meal_log.log_recipe(recipe)
    except PantryChefError as e:
        fail("recipe log", str(e), json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "recipe log",
            "data": {"log_id": meal.log_id, "calories": meal.calories},
            "human_summary": f"Logged '{meal.recipe_name}'",
        })
    else:
        console.print(f"[green]Logged:[/green] {meal.recipe_name} ({meal.calories} kcal)")


# ============================================================================
# Pantry Commands
# ============================================================================


def print_pantry(items, title: str) -> None:
    table = Table(title=title)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Item", style="cyan")
    table.add_column("Expires")
    table.add_column("Added", style="dim")
    for item in items:
        table.add_row(
            str(item.item_id),
            item.name,
            item.expiration_date.isoformat() if item.expiration_date else "-",
            item.added_at.date().isoformat(),
        )
    console.print(table)


def pantry_rows(items) -> list[dict]:
    return [
        {
            "item_id": item.item_id,
            "name": item.name,
            "expiration_date": item.expiration_date.isoformat() if item.expiration_date else None,
            "added_at": item.added_at.isoformat(),
        }
        for item in items
    ]


@pantry_app.command("add")
def pantry_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Item name"),
    expires: Optional[str] = typer.Option(
        None, "--expires", "-e", help="Expiration date (YYYY-MM-DD)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Add an item to the pantry."""
    json_output = use_json(ctx, json_output)
    expiration = parse_date(expires, "pantry add", json_output)
    try:
        item = get_services(ctx).pantry.add_item(name, expiration)
    except PantryChefError as e:
        fail("pantry add", str(e), json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "pantry add",
            "data": pantry_rows([item])[0],
            "human_summary": f"Added {item.name}",
        })
    else:
        console.print(f"[green]Added:[/green] {item.name} (ID: {item.item_id})")


@pantry_app.command("remove")
def pantry_remove(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="Item ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Remove an item from the pantry."""
    json_output = use_json(ctx, json_output)
    try:
        get_services(ctx).pantry.remove_item(item_id)
    except PantryChefError as e:
        fail("pantry remove", str(e), json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "pantry remove",
            "data": {"item_id": item_id},
            "human_summary": f"Removed item {item_id}",
        })
    else:
        console.print(f"[green]Removed item {item_id}[/green]")


@pantry_app.command("list")
def pantry_list(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List pantry items, soonest to expire first."""
    json_output = use_json(ctx, json_output)
    items = get_services(ctx).pantry.list_items()

    if json_output:
        output_json({
            "success": True,
            "command": "pantry list",
            "data": {"items": pantry_rows(items)},
            "human_summary": f"{len(items)} item(s) in pantry",
        })
    elif not items:
        console.print("Pantry is empty")
    else:
        print_pantry(items, "Pantry")


@pantry_app.command("expiring")
def pantry_expiring(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List items expiring soon."""
    json_output = use_json(ctx, json_output)
    pantry = get_services(ctx).pantry
    items = pantry.expiring_items()

    if json_output:
        output_json({
            "success": True,
            "command": "pantry expiring",
            "data": {"items": pantry_rows(items), "within_days": pantry.expiring_within_days},
            "human_summary": f"{len(items)} item(s) expiring soon",
        })
    elif not items:
        console.print("Nothing expiring soon")
    else:
        print_pantry(items, f"Expiring within {pantry.expiring_within_days} days")


# ============================================================================
# Meal Log Commands
# ============================================================================


@meals_app.command("log")
def meals_log(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Meal name"),
    calories: int = typer.Option(0, "--calories", help="Calories (kcal)"),
    protein: int = typer.Option(0, "--protein", help="Protein (g)"),
    carbs: int = typer.Option(0, "--carbs", help="Carbs (g)"),
    fat: int = typer.Option(0, "--fat", help="Fat (g)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log a meal by hand."""
    json_output = use_json(ctx, json_output)
    try:
        meal = get_services(ctx).meal_log.log_manual(name, calories, protein, carbs, fat)
    except PantryChefError as e:
        fail("meals log", str(e), json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "meals log",
            "data": {"log_id": meal.log_id, "recipe_name": meal.recipe_name,
                     "calories": meal.calories},
            "human_summary": f"Logged '{meal.recipe_name}'",
        })
    else:
        console.print(f"[green]Logged:[/green] {meal.recipe_name} ({meal.calories} kcal)")


@meals_app.command("today")
def meals_today(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show meals logged today against your targets."""
    json_output = use_json(ctx, json_output)
    services = get_services(ctx)
    meals = services.meal_log.meals_for_day()
    totals = services.meal_log.daily_totals()
    targets = services.profiles.get_targets()

    if json_output:
        output_json({
            "success": True,
            "command": "meals today",
            "data": {
                "meals": [
                    {
                        "log_id": m.log_id,
                        "recipe_name": m.recipe_name,
                        "calories": m.calories,
                        "protein": m.protein,
                        "carbs": m.carbs,
                        "fat": m.fat,
                        "source": m.source,
                        "logged_at": m.logged_at.isoformat(),
                    }
                    for m in meals
                ],
                "totals": totals.to_dict(),
                "targets": targets.to_dict(),
            },
            "human_summary": f"{totals.calories}/{targets.calorie_target} kcal today",
        })
        return

    if not meals:
        console.print("No meals logged today")
        return

    table = Table(title=f"Meals on {totals.day.isoformat()}")
    table.add_column("Time", style="dim")
    table.add_column("Meal", style="cyan")
    table.add_column("kcal", justify="right")
    table.add_column("P", justify="right")
    table.add_column("C", justify="right")
    table.add_column("F", justify="right")
    for m in meals:
        table.add_row(
            m.logged_at.strftime("%H:%M"), m.recipe_name,
            str(m.calories), str(m.protein), str(m.carbs), str(m.fat),
        )
    table.add_row(
        "", "[bold]Total[/bold]",
        f"{totals.calories}/{targets.calorie_target}",
        f"{totals.protein}/{targets.protein_target}",
        f"{totals.carbs}/{targets.carb_target}",
        f"{totals.fat}/{targets.fat_target}",
    )
    console.print(table)


# ============================================================================
# Weight Commands
# ============================================================================


@weight_app.command("add")
def weight_add(
    ctx: typer.Context,
    weight: float = typer.Argument(..., help="Weight in kg"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log today's weight."""
    json_output = use_json(ctx, json_output)
    try:
        entry = get_services(ctx).weights.add_weight(weight)
    except PantryChefError as e:
        fail("weight add", str(e), json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "weight add",
            "data": {"weight_kg": entry.weight, "logged_at": entry.logged_at.isoformat()},
            "human_summary": f"Logged {entry.weight:.1f} kg",
        })
    else:
        console.print(f"[green]Logged:[/green] {entry.weight:.1f} kg")


@weight_app.command("list")
def weight_list(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=1, help="Most recent N entries"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List weight history."""
    json_output = use_json(ctx, json_output)
    history = get_services(ctx).weights.history(limit=limit)

    if json_output:
        output_json({
            "success": True,
            "command": "weight list",
            "data": {
                "entries": [
                    {"weight_kg": e.weight, "logged_at": e.logged_at.isoformat()}
                    for e in history
                ]
            },
            "human_summary": f"{len(history)} entries",
        })
        return

    if not history:
        console.print("No weight entries found")
        return

    table = Table(title="Weight History")
    table.add_column("Date", style="cyan")
    table.add_column("Weight", justify="right")
    table.add_column("", justify="right")

    previous = None
    for entry in history:
        delta = f"{entry.weight - previous:+.1f}" if previous is not None else ""
        previous = entry.weight
        table.add_row(entry.logged_at.date().isoformat(), f"{entry.weight:.1f}", delta)
    console.print(table)


# ============================================================================
# Dashboard
# ============================================================================


LEVEL_STYLES = {"warning": "red", "notice": "yellow", "success": "green"}


@app.command()
def insights(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show today's progress and coaching insights."""
    json_output = use_json(ctx, json_output)
    dashboard = get_services(ctx).insights.dashboard()

    if json_output:
        output_json({
            "success": True,
            "command": "insights",
            "data": dashboard,
            "human_summary": f"{len(dashboard['insights'])} insight(s)",
        })
        return

    targets = dashboard["targets"]
    consumed = dashboard["consumed"]
    progress = dashboard["progress"]

    table = Table(title=f"Progress for {dashboard['date']}")
    table.add_column("Nutrient", style="cyan")
    table.add_column("Consumed", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Status")
    for label, consumed_key, target_key in (
        ("Calories", "calories", "calorie_target"),
        ("Protein", "protein", "protein_target"),
        ("Carbs", "carbs", "carb_target"),
        ("Fat", "fat", "fat_target"),
    ):
        status = progress[consumed_key]
        style = {"ok": "green", "low": "yellow", "over": "red"}[status]
        table.add_row(
            label,
            str(consumed[consumed_key]),
            str(targets[target_key]),
            f"[{style}]{status}[/{style}]",
        )
    console.print(table)

    if not dashboard["insights"]:
        console.print("No coaching insights right now")
    for insight in dashboard["insights"]:
        style = LEVEL_STYLES.get(insight["level"], "white")
        console.print(f"[{style}]• {insight['message']}[/{style}]")


if __name__ == "__main__":
    app()
