#!/usr/bin/env python3
"""
Demo script for the recipekit DSL.
Builds two coffee recipes, hashes them and compares their similarity.
"""
from recipekit import (
    Cue,
    Recipe,
    RecipeStep,
    StoveHeat,
    container,
    ingredient,
    minutes,
    tool,
)


def print_section(title: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70 + "\n")


def build_latte_caffe() -> Recipe:
    tazza = container("Tazza", material="ceramic", volume=1)
    latte = ingredient("Latte", amount=1, unit="cup")
    espresso = ingredient("Espresso", amount=1, unit="shot")
    sugar = ingredient("Sugar", amount=1, unit="tablespoon")

    step1 = RecipeStep().add(latte, espresso, sugar).to(tazza).mix()
    step2 = (
        RecipeStep()
        .heat(StoveHeat.MEDIUM)
        .for_(minutes(1))
        .until_cue(Cue.SMELL, "coffee aroma")
    )

    return Recipe(
        "Latte Caffe",
        ingredients=[latte, espresso, sugar],
        tools=[tool("Spoon")],
        steps=[step1, step2],
        difficulty="very easy",
        estimated_time=minutes(3),
        tags=["beverage", "Italian", "breakfast"],
    )


def main():
    """Run the hashing demonstration."""
    print_section("Latte Caffe")
    caffe = build_latte_caffe()
    print(caffe.to_text())

    print_section("Similarity hashing")
    biscotti = build_latte_caffe()
    biscotti.name = "Latte Biscotti"
    cookie = ingredient("Cookie", amount=1, unit="piece")
    biscotti.ingredients.append(cookie)
    biscotti.create_step(cookie).to(container("Tazza"))

    print(f"Latte Caffe hash:    {caffe.cook()}")
    print(f"Latte Biscotti hash: {biscotti.cook()}")
    print(f"Self similarity:     {caffe.compare_to(caffe):.4f}")
    print(f"Cross similarity:    {caffe.compare_to(biscotti.cook()):.4f}")


if __name__ == "__main__":
    main()
