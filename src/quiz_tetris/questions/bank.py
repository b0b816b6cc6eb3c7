"""Built-in question content, used when no CSV is configured or it fails to load."""

from __future__ import annotations

from typing import Tuple

from .model import Question


QUESTION_BANK: Tuple[Question, ...] = (
    Question(
        id="cs_1",
        prompt="What is the BEST first step to take?",
        scenario=(
            "A customer calls saying they received the wrong item in their order. They seem "
            "frustrated and mention they needed it for an event tomorrow."
        ),
        options=(
            "Immediately offer a full refund without checking the order.",
            "Apologize for the error and verify the order details with them.",
            "Tell them to return the item before any action can be taken.",
            "Transfer the call to a supervisor right away.",
        ),
        correct_index=1,
        category="Customer Service",
        difficulty=1,
        explanation=(
            "Always verify order details first to understand the situation fully and show the "
            "customer you're taking their concern seriously."
        ),
    ),
    Question(
        id="cs_2",
        prompt="What is the BEST approach?",
        scenario=(
            "A customer is asking about a product feature that you're not completely sure about. "
            "The customer seems in a hurry."
        ),
        options=(
            "Make your best guess so they don't have to wait.",
            "Tell them you'll find out and call them back with accurate information.",
            "Redirect them to check the website themselves.",
            "Transfer them to multiple departments until someone knows.",
        ),
        correct_index=1,
        category="Customer Service",
        difficulty=1,
        explanation=(
            "It's better to take time to provide accurate information than to give incorrect "
            "information quickly. This builds trust."
        ),
    ),
    Question(
        id="math_1",
        prompt="What is 15 + 27?",
        options=("41", "42", "43", "44"),
        correct_index=1,
        category="Mathematics",
        difficulty=1,
        explanation="15 + 27 = 42",
    ),
    Question(
        id="cs_3",
        prompt="What should you do FIRST?",
        scenario=(
            "During a busy shift, a customer approaches you with a complaint while you're "
            "helping another customer."
        ),
        options=(
            "Ignore the new customer until you're completely done.",
            "Acknowledge the new customer and let them know you'll be with them shortly.",
            "Stop helping your current customer to address the complaint.",
            "Point the new customer to another employee.",
        ),
        correct_index=1,
        category="Customer Service",
        difficulty=2,
        explanation=(
            "Acknowledging waiting customers shows respect while maintaining focus on your "
            "current customer."
        ),
    ),
    Question(
        id="cs_4",
        prompt="What is the BEST response?",
        scenario=(
            "A customer is upset because a promotion they saw advertised has expired. They "
            "insist they should still get the discount."
        ),
        options=(
            "Tell them there's nothing you can do about expired promotions.",
            "Apologize for their frustration and explain the promotion period while offering "
            "to check for current offers.",
            "Give them the expired discount to avoid conflict.",
            "Argue that the expiration date was clearly stated.",
        ),
        correct_index=1,
        category="Customer Service",
        difficulty=3,
        explanation=(
            "Empathize with the customer while setting appropriate boundaries. Offering "
            "alternatives shows you care about their business."
        ),
    ),
    Question(
        id="math_2",
        prompt="What is 144 / 12?",
        options=("10", "11", "12", "13"),
        correct_index=2,
        category="Mathematics",
        difficulty=3,
        explanation="144 / 12 = 12",
    ),
    Question(
        id="cs_6",
        prompt="What is the BEST course of action?",
        scenario=(
            "A customer wants to return an item without a receipt. Your store policy requires "
            "receipts for returns."
        ),
        options=(
            "Refuse the return immediately citing store policy.",
            "Accept the return without question to keep the customer happy.",
            "Explain the policy politely and offer alternative solutions like store credit or exchange.",
            "Call security to handle the situation.",
        ),
        correct_index=2,
        category="Customer Service",
        difficulty=4,
        explanation=(
            "Enforcing policies while offering alternatives shows professionalism and "
            "flexibility within guidelines."
        ),
    ),
    Question(
        id="math_3",
        prompt="If a product costs $80 and is on sale for 25% off, what is the sale price?",
        options=("$55", "$60", "$65", "$70"),
        correct_index=1,
        category="Mathematics",
        difficulty=5,
        explanation="25% of $80 is $20, so $80 - $20 = $60",
    ),
)


FALLBACK_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="fallback_1",
        prompt="Fallback question?",
        options=("A", "B", "C", "D"),
        correct_index=0,
        category="Fallback",
        difficulty=1,
        explanation="Used if the question source fails",
    ),
)
