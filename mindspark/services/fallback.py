"""
Curated questions served whenever generation fails.

Every entry is concrete and scenario-based so it passes the same quality gate
that generated questions go through.
"""
from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence

from mindspark.models import GeneratedQuestion


def _q(question: str, options: List[str], correct: int, explanation: str) -> GeneratedQuestion:
    return GeneratedQuestion(question=question, options=options, correct_answer=correct, explanation=explanation)


TOPIC_QUESTIONS: Dict[str, List[GeneratedQuestion]] = {
    "Astronomy": [
        _q(
            "An astronaut on the Moon drops a hammer and a feather at the same moment. What do they observe?",
            [
                "The hammer lands first because heavier objects fall faster",
                "Both hit the ground together because there is no air resistance",
                "The feather drifts away because the Moon has no gravity",
                "Neither falls because objects are weightless on the Moon",
            ],
            1,
            "Without air, every object falls with the same acceleration, as Apollo 15 demonstrated in 1971.",
        ),
        _q(
            "You see a full Moon rising just as the Sun sets. Where is the Moon relative to Earth and the Sun?",
            [
                "Between the Earth and the Sun",
                "At a right angle to the Earth-Sun line",
                "On the opposite side of Earth from the Sun",
                "Directly behind the Sun as seen from Earth",
            ],
            2,
            "A full Moon is fully lit from our view, so the Sun must be behind us: Sun, Earth and Moon are roughly in a line.",
        ),
        _q(
            "A solar flare erupts on the Sun's surface. Roughly how long until its light reaches Earth?",
            [
                "About 1.3 seconds",
                "About 4 hours",
                "About 8 days",
                "About 8 minutes and 20 seconds",
            ],
            3,
            "Earth is about 150 million km from the Sun; at 300,000 km/s light needs roughly 500 seconds.",
        ),
    ],
    "Human Evolution": [
        _q(
            'A skeleton nicknamed "Lucy" was found in Ethiopia in 1974. Which species does Lucy belong to?',
            [
                "Australopithecus afarensis, an early upright-walking hominin",
                "Homo neanderthalensis, an Ice Age European hominin",
                "Homo erectus, the first hominin known to leave Africa",
                "Paranthropus boisei, a robust East African hominin",
            ],
            0,
            "Lucy (AL 288-1) is about 3.2 million years old and is the best-known Australopithecus afarensis fossil.",
        ),
        _q(
            "Genome studies find that many people outside Africa carry about 1-2% archaic DNA. Which group contributed most of it?",
            [
                "Chimpanzees, through a shared recent ancestor",
                "Neanderthals, through interbreeding after humans left Africa",
                "Homo habilis, through contact at early tool sites",
                "Australopithecines, through gene flow in the Pliocene",
            ],
            1,
            "Modern humans interbred with Neanderthals in Eurasia roughly 50,000 years ago, leaving traces in non-African genomes.",
        ),
    ],
    "Data Structures and Algorithms": [
        _q(
            "A service looks up user records by ID millions of times per second and never needs them sorted. Which structure gives the fastest average lookups?",
            [
                "A sorted array searched with binary search in O(log n)",
                "A singly linked list scanned from the head in O(n)",
                "A hash table keyed by user ID with O(1) average lookups",
                "A stack popped until the matching ID appears",
            ],
            2,
            "Hash tables give constant average-time lookups when ordering is not required.",
        ),
        _q(
            "You push 1, 2 and 3 onto an empty stack and then pop twice. Which value does the second pop return?",
            ["3", "2", "1", "Nothing, because the stack is already empty"],
            1,
            "A stack is last-in first-out: the first pop returns 3 and the second returns 2.",
        ),
        _q(
            "Breadth-first search starts from node A in an unweighted graph. Which property do the paths it discovers have?",
            [
                "Nodes are visited in alphabetical order of their labels",
                "Each path has the smallest total edge weight",
                "Every path found is also a depth-first search path",
                "Each node is reached by a path with the fewest possible edges",
            ],
            3,
            "BFS explores level by level, so the first time it reaches a node it has used the minimum number of edges.",
        ),
    ],
    "Computer Science": [
        _q(
            "A laptop's RAM is full, so the operating system moves inactive pages to disk. Which technique is it using?",
            [
                "Paging out to virtual memory backed by disk",
                "Defragmenting the file system",
                "Overclocking the processor cache",
                "Compiling programs ahead of time",
            ],
            0,
            "Virtual memory lets the OS evict rarely used pages to a swap area on disk and load them back on demand.",
        ),
        _q(
            "An 8-bit signed integer in two's complement holds 127. Which value results from adding 1?",
            [
                "128, stored exactly in the 8-bit register",
                "-128, because the addition overflows into the sign bit",
                "0, because the register wraps around to zero",
                "127, because the addition saturates at the maximum",
            ],
            1,
            "0111 1111 + 1 = 1000 0000, which two's complement reads as -128.",
        ),
    ],
    "Machine Learning": [
        _q(
            "A model scores 99% accuracy on its training data but only 62% on new data. Which problem does this most likely indicate?",
            [
                "Underfitting, because the model is too simple",
                "A learning rate that is far too small",
                "Overfitting: the model memorized noise in the training set",
                "Too much regularization on the weights",
            ],
            2,
            "A large gap between training and validation performance is the classic sign of overfitting.",
        ),
        _q(
            "A spam filter flags 100 emails and 90 of them really are spam. How high is its precision?",
            [
                "0.10, since 10 flagged emails were not spam",
                "1.00, since every flagged email was reviewed",
                "It cannot be computed without the total inbox size",
                "0.90, since 90 of the 100 flagged emails are spam",
            ],
            3,
            "Precision is true positives divided by everything flagged: 90 / 100 = 0.90.",
        ),
    ],
}

GENERIC_QUESTIONS: List[GeneratedQuestion] = [
    _q(
        "A cook adds a spoonful of salt to a pot of water. How does this change the water's boiling point?",
        [
            "It rises slightly because dissolved salt raises the boiling point",
            "It drops sharply so the water boils much sooner",
            "It stays exactly the same as for pure water",
            "The water can no longer boil at sea level",
        ],
        0,
        "Dissolved particles cause boiling point elevation, although a spoonful only raises it by a fraction of a degree.",
    ),
    _q(
        "A traveller flies from London to New York in winter and resets their watch on landing. Which way do they move it?",
        [
            "Forward by five hours, since New York is ahead",
            "Back by five hours, since New York is behind London",
            "No change, because both cities share a time zone",
            "Back by twelve hours, since they crossed the date line",
        ],
        1,
        "In winter London is on UTC and New York on UTC-5, so local time in New York is five hours earlier.",
    ),
    _q(
        "An iron nail left outside in the rain for a month grows an orange coating. Which chemical reaction explains it?",
        [
            "Reduction of iron into metallic copper",
            "Combustion of iron triggered by sunlight",
            "Oxidation of iron into hydrated iron oxide, known as rust",
            "Dissolving of iron into rainwater as table salt",
        ],
        2,
        "Iron reacts with oxygen and water to form hydrated iron(III) oxide, the orange-brown rust.",
    ),
    _q(
        "A recipe for 4 people needs 300 g of flour. How much flour is needed to serve 10 people?",
        [
            "600 g, doubling the original amount",
            "1200 g, four times the original amount",
            "310 g, adding 10 g per extra person",
            "750 g, scaling 300 g by a factor of 2.5",
        ],
        3,
        "Ten people is 2.5 times four people, and 300 g x 2.5 = 750 g.",
    ),
    _q(
        "A student sees lightning and counts 6 seconds before hearing the thunder. Roughly how far away was the strike?",
        [
            "About 2 km, since sound travels roughly 340 m per second",
            "About 6 km, one kilometre for every second counted",
            "About 200 m, because light and sound arrive together",
            "About 20 km, since thunder is slowed by the wind",
        ],
        0,
        "Light arrives almost instantly; sound covers about 340 m/s x 6 s = 2 km.",
    ),
    _q(
        "A houseplant kept in a dark cupboard for two weeks turns pale and yellow. Which process could it not carry out?",
        [
            "Respiration, which only happens in sunlight",
            "Photosynthesis, which needs light to produce sugars",
            "Transpiration, which stops completely indoors",
            "Pollination, which needs direct sunlight on the flowers",
        ],
        1,
        "Without light the plant cannot photosynthesize, so it stops making chlorophyll and starves.",
    ),
]


def _lookup_topic(topic: str) -> List[GeneratedQuestion]:
    wanted = (topic or "").strip().lower()
    for key, questions in TOPIC_QUESTIONS.items():
        if key.lower() == wanted:
            return questions
    return []


def _fresh(candidates: Sequence[GeneratedQuestion], recent: Sequence[str]) -> List[GeneratedQuestion]:
    seen = {r.strip().lower() for r in recent}
    return [c for c in candidates if c.question.strip().lower() not in seen]


def select_fallback_question(
    topic: str,
    recent_questions: Optional[Sequence[str]] = None,
    rng: Optional[random.Random] = None,
) -> GeneratedQuestion:
    """
    Pick a curated question. Never raises.

    Order of preference: topic entries not recently asked, generic entries not
    recently asked, then any topic entry, then any generic entry.
    """
    rng = rng or random
    recent = list(recent_questions or [])
    topic_entries = _lookup_topic(topic)

    pool = (
        _fresh(topic_entries, recent)
        or _fresh(GENERIC_QUESTIONS, recent)
        or topic_entries
        or GENERIC_QUESTIONS
    )
    return rng.choice(pool).model_copy(deep=True)


def fallback_topics() -> List[str]:
    return list(TOPIC_QUESTIONS)
