"""Static help topics and a best-effort counter of how often each is asked."""

import json
import os

from rich.console import Console

console = Console(stderr=True)

FAQ_DATA = {
    "welcome_message": "Hello! Select a topic below to get help with the simulator.",
    "categories": [
        {
            "id": "getting-started",
            "name": "Getting Started",
            "questions": [
                {
                    "id": "what-is-turing",
                    "text": "What is a Turing Machine?",
                    "answer": "A Turing Machine is a mathematical model of computation: an abstract machine "
                              "that reads and writes symbols on a strip of tape according to a table of rules. "
                              "It helps us understand the fundamental limits of what can be computed."
                },
                {
                    "id": "how-to-use-simulator",
                    "text": "How do I use the simulator?",
                    "answer": "Load a program file (or keep the built-in binary increment example), choose "
                              "'Parse & Initialize', then step through it one transition at a time or run it "
                              "continuously. The speed setting controls the delay between steps."
                },
                {
                    "id": "binary-increment",
                    "text": "What is binary increment?",
                    "answer": "Binary increment adds 1 to a binary number. The default program scans to the "
                              "rightmost digit, then carries the 1 leftwards until it finds a 0 or a blank."
                }
            ]
        },
        {
            "id": "common-issues",
            "name": "Common Issues",
            "questions": [
                {
                    "id": "simulator-not-working",
                    "text": "The simulator isn't working correctly",
                    "answer": "Check the warnings printed after parsing: lines the parser could not read are "
                              "skipped. Every rule needs an L, R or N clause, and every state the machine "
                              "reaches needs a rule for each symbol it can read."
                },
                {
                    "id": "slow-performance",
                    "text": "The simulator is running slowly",
                    "answer": "Raise the speed setting (1-100) in the configuration, or use the automation "
                              "mode with --run to execute without animation."
                },
                {
                    "id": "save-machine",
                    "text": "How do I save my Turing Machine?",
                    "answer": "Programs are plain text files. Keep them under programs/ and load them by path."
                }
            ]
        },
        {
            "id": "syntax",
            "name": "Program Syntax",
            "questions": [
                {
                    "id": "rule-format",
                    "text": "How are rules written?",
                    "answer": "Inside a state block, write '<symbol>: {write: <symbol>, <L|R|N>: <next state>}'. "
                              "The write clause is optional; a list like '[0, 1]' shares one rule."
                },
                {
                    "id": "halting",
                    "text": "When does the machine stop?",
                    "answer": "A rule with the N move halts the machine, and so does entering the state named "
                              "'done'. A missing rule stops the run with an error naming the state and symbol."
                }
            ]
        }
    ]
}


class MemoryFrequencyStore:
    def __init__(self):
        self.counts = {}

    def increment(self, question_id):
        self.counts[question_id] = self.counts.get(question_id, 0) + 1

    def get_counts(self):
        return dict(self.counts)


class FrequencyStore:
    """JSON file of question id -> times asked. Failures are reported, never raised."""

    def __init__(self, path="logs/faq_counts.json"):
        self.path = path

    def get_counts(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            console.print(f"[yellow]Could not read FAQ counters from {self.path}: {e}[/yellow]")
            return {}

    def increment(self, question_id):
        counts = self.get_counts()
        counts[question_id] = counts.get(question_id, 0) + 1
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(counts, f, indent=4)
        except OSError as e:
            console.print(f"[yellow]Could not update FAQ counters at {self.path}: {e}[/yellow]")


def list_categories():
    return [(category["id"], category["name"]) for category in FAQ_DATA["categories"]]


def find_category(category_id):
    for category in FAQ_DATA["categories"]:
        if category["id"] == category_id:
            return category
    return None


def find_question(category_id, question_id):
    category = find_category(category_id)
    if category is None:
        return None
    for question in category["questions"]:
        if question["id"] == question_id:
            return question
    return None


def ask(category_id, question_id, store=None):
    """Return the answer for a question, counting the lookup in store."""
    question = find_question(category_id, question_id)
    if question is None:
        return None
    if store is not None:
        store.increment(question_id)
    return question["answer"]


def most_frequent(store, limit=3):
    counts = store.get_counts()
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:limit]
