"""
Text and markdown views of a recipe.
"""
from typing import Any, List

from recipekit.models.enums import ActionType
from recipekit.models.schemas import format_quantity


def _name(entity: Any, fallback: str = "it") -> str:
    if entity is None:
        return fallback
    if isinstance(entity, str):
        return entity
    return entity.name


def _temperature(temperature: Any) -> str:
    return str(temperature) if temperature is not None else ""


def describe_action(action: Any) -> str:
    """One sentence describing a step action."""
    if action.type == ActionType.ADD:
        return f"Add {_name(action.ingredient)} to {_name(action.container)}."
    if action.type == ActionType.MIX:
        if action.container is None:
            return "Mix ingredients."
        return f"Mix ingredients in {_name(action.container)}."
    if action.type == ActionType.HEAT:
        if action.target_temperature is not None:
            return f"Cook to an internal temperature of {_temperature(action.target_temperature)}."
        return f"Heat {_name(action.container)} to {_temperature(action.temperature)}."
    if action.type == ActionType.TRANSFER:
        return f"Transfer ingredients from {_name(action.from_)} to {_name(action.to)}."
    if action.type == ActionType.PREPARE:
        return f"{action.technique} {_name(action.ingredient)}."
    if action.type == ActionType.REST:
        if action.duration is not None:
            return f"Let it rest for {action.duration}."
        return "Let it rest."
    if action.type == ActionType.EQUIPMENT_SETTING:
        setting = action.setting
        if setting is None and action.temperature is not None:
            setting = _temperature(action.temperature)
            if action.method is not None:
                setting += f" ({format_quantity(action.method)})"
        return f"Set {_name(action.equipment)} to {format_quantity(setting)}."
    if action.type == ActionType.PREHEAT:
        return f"Preheat {_name(action.appliance)} to {_temperature(action.temperature)}."
    return ""


def describe_step(step: Any) -> str:
    """A step's actions, timings, cues, adjustments and sensory checks as prose."""
    sentences: List[str] = []
    for action in step.actions:
        sentence = describe_action(action)
        if sentence:
            sentences.append(sentence)
        if action.duration is not None and action.type != ActionType.REST:
            sentences.append(f"Do this for {action.duration}.")
        if action.condition:
            sentences.append(f"Continue until {action.condition}.")
    for cue in step.cues:
        sentences.append(f"Look for {cue.description} ({format_quantity(cue.type)}).")
    for adj in step.adjustments:
        sentences.append(f"If {adj.condition}, then {adj.action}.")
    for check in step.sensory_checks:
        sentence = f"{check.description} ({format_quantity(check.type)})."
        if check.adjustment:
            sentence += f" If needed, {check.adjustment}."
        sentences.append(sentence)
    return " ".join(sentences)


def _amount(ing: Any) -> str:
    parts = [format_quantity(ing.amount) if ing.amount is not None else None, ing.unit, ing.name]
    return " ".join(p for p in parts if p)


def _thread_label(index: int) -> str:
    return chr(ord("a") + index)


def render_text(recipe: Any) -> str:
    """Human-readable text view with emojis."""
    lines = [f"🍽️ {recipe.name}", ""]
    lines.append(f"👥 Servings: {format_quantity(recipe.servings)}")
    if recipe.estimated_time is not None:
        lines.append(f"⏱️ Estimated Time: {recipe.estimated_time}")
    lines.append(f"📊 Difficulty: {recipe.difficulty}")
    lines.append("")

    lines.append("🧾 Ingredients:")
    lines.extend(f"  • {_amount(ing)}" for ing in recipe.ingredients)

    lines.append("")
    lines.append("🔧 Tools:")
    lines.extend(f"  • {t.name}" for t in recipe.tools)

    lines.append("")
    lines.append("🔌 Appliances:")
    lines.extend(f"  • {a.name}" for a in recipe.appliances)

    lines.append("")
    lines.append("👨‍🍳 Instructions:")
    for index, step in enumerate(recipe.steps, start=1):
        lines.append(f"  {index}. {describe_step(step)}")
        if step.threads:
            lines.append("    Meanwhile:")
            for t_index, thread in enumerate(step.threads):
                lines.append(f"    {_thread_label(t_index)}. {describe_step(thread)}")

    if recipe.mise_en_place:
        lines.append("")
        lines.append("🔪 Mise en Place:")
        lines.extend(f"  • {item}" for item in recipe.mise_en_place)

    if recipe.nutrition_info:
        lines.append("")
        lines.append("🥗 Nutrition Information:")
        lines.extend(f"  • {key}: {value}" for key, value in recipe.nutrition_info.items())

    if recipe.serving_suggestions:
        lines.append("")
        lines.append("🍴 Serving Suggestions:")
        lines.extend(f"  • {s}" for s in recipe.serving_suggestions)

    if recipe.substitutions:
        lines.append("")
        lines.append("🔄 Possible Substitutions:")
        lines.extend(
            f"  • Instead of {sub.original.name}, you can use {sub.alternative.name}"
            for sub in recipe.substitutions
        )

    if recipe.tags:
        lines.append("")
        lines.append(f"🏷️ Tags: {', '.join(recipe.tags)}")

    return "\n".join(lines) + "\n"


def render_markdown(recipe: Any) -> str:
    """Markdown view with emojis."""
    lines = [f"# 🍽️ {recipe.name}", ""]
    lines.append(f"- 👥 **Servings:** {format_quantity(recipe.servings)}")
    if recipe.estimated_time is not None:
        lines.append(f"- ⏱️ **Estimated Time:** {recipe.estimated_time}")
    lines.append(f"- 📊 **Difficulty:** {recipe.difficulty}")
    lines.append("")

    lines.extend(["## 🧾 Ingredients", ""])
    lines.extend(f"- {_amount(ing)}" for ing in recipe.ingredients)

    lines.extend(["", "## 🔧 Tools", ""])
    lines.extend(f"- {t.name}" for t in recipe.tools)

    lines.extend(["", "## 🔌 Appliances", ""])
    lines.extend(f"- {a.name}" for a in recipe.appliances)

    lines.extend(["", "## 👨‍🍳 Instructions", ""])
    for index, step in enumerate(recipe.steps, start=1):
        lines.extend([f"{index}. {describe_step(step)}", ""])
        if step.threads:
            lines.extend(["    *Meanwhile:*", ""])
            for t_index, thread in enumerate(step.threads):
                lines.extend([f"    {_thread_label(t_index)}. {describe_step(thread)}", ""])

    if recipe.mise_en_place:
        lines.extend(["## 🔪 Mise en Place", ""])
        lines.extend(f"- {item}" for item in recipe.mise_en_place)
        lines.append("")

    if recipe.nutrition_info:
        lines.extend(["## 🥗 Nutrition Information", ""])
        lines.extend(f"- **{key}:** {value}" for key, value in recipe.nutrition_info.items())
        lines.append("")

    if recipe.serving_suggestions:
        lines.extend(["## 🍴 Serving Suggestions", ""])
        lines.extend(f"- {s}" for s in recipe.serving_suggestions)
        lines.append("")

    if recipe.substitutions:
        lines.extend(["## 🔄 Possible Substitutions", ""])
        lines.extend(
            f"- Instead of {sub.original.name}, you can use {sub.alternative.name}"
            for sub in recipe.substitutions
        )
        lines.append("")

    if recipe.tags:
        lines.extend(["## 🏷️ Tags", ""])
        lines.append(", ".join(f"`{tag}`" for tag in recipe.tags))

    return "\n".join(lines) + "\n"
