"""Seed the question bank and the task catalogue when they are empty."""
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from codehelper.models.assessment import AssessmentQuestion
from codehelper.models.task import ProgrammingTask

logger = logging.getLogger(__name__)

ASSESSMENT_QUESTIONS = [
    {
        "question": "What is a variable in programming?",
        "type": "multiple_choice",
        "options": [
            "A container that stores data",
            "A function that performs calculations",
            "A loop that repeats code",
            "A condition that checks values",
        ],
        "correct_answer": "A container that stores data",
        "category": "syntax",
        "difficulty": "beginner",
        "language": None,
        "explanation": "A variable is a named container for a value that can be read and changed while the program runs.",
    },
    {
        "question": "What does the following code do?\n\nfor (let i = 0; i < 5; i++) {\n  console.log(i);\n}",
        "type": "conceptual",
        "correct_answer": "Prints numbers 0 through 4",
        "category": "logic",
        "difficulty": "beginner",
        "language": "javascript",
        "explanation": "The loop starts at 0 and stops before 5, printing 0, 1, 2, 3 and 4.",
    },
    {
        "question": "What is the purpose of a function?",
        "type": "multiple_choice",
        "options": ["To store data", "To organize and reuse code", "To create variables", "To print output"],
        "correct_answer": "To organize and reuse code",
        "category": "syntax",
        "difficulty": "beginner",
        "language": None,
        "explanation": "Functions group code into named blocks that can be called many times.",
    },
    {
        "question": "What does the if statement do?",
        "type": "multiple_choice",
        "options": ["Repeats code", "Executes code conditionally", "Stores data", "Defines a function"],
        "correct_answer": "Executes code conditionally",
        "category": "logic",
        "difficulty": "beginner",
        "language": None,
        "explanation": "An if statement runs its block only when the condition is true.",
    },
    {
        "question": "What is an array?",
        "type": "multiple_choice",
        "options": [
            "A collection of elements stored in contiguous memory",
            "A single value",
            "A function",
            "A loop",
        ],
        "correct_answer": "A collection of elements stored in contiguous memory",
        "category": "data_structures",
        "difficulty": "beginner",
        "language": None,
        "explanation": "An array stores an ordered collection of elements addressed by index.",
    },
    {
        "question": "What is the time complexity of binary search?",
        "type": "multiple_choice",
        "options": ["O(n)", "O(log n)", "O(n^2)", "O(1)"],
        "correct_answer": "O(log n)",
        "category": "algorithms",
        "difficulty": "intermediate",
        "language": None,
        "explanation": "Each step halves the search space.",
    },
    {
        "question": "What is recursion?",
        "type": "multiple_choice",
        "options": ["A function that calls itself", "A type of loop", "A data structure", "A variable"],
        "correct_answer": "A function that calls itself",
        "category": "algorithms",
        "difficulty": "intermediate",
        "language": None,
        "explanation": "A recursive function solves a problem by calling itself on smaller subproblems.",
    },
    {
        "question": "What is the difference between a list and a tuple in Python?",
        "type": "conceptual",
        "correct_answer": "Lists are mutable, tuples are immutable",
        "category": "data_structures",
        "difficulty": "intermediate",
        "language": "python",
        "explanation": "A list can be modified after creation, a tuple cannot.",
    },
    {
        "question": "What is the difference between == and === in JavaScript?",
        "type": "conceptual",
        "correct_answer": "== compares values with type coercion, === compares values and types strictly",
        "category": "syntax",
        "difficulty": "intermediate",
        "language": "javascript",
        "explanation": "== coerces both operands before comparing; === never coerces.",
    },
    {
        "question": "What is a closure in programming?",
        "type": "multiple_choice",
        "options": [
            "A function that has access to variables in its outer scope",
            "A way to close a program",
            "A type of loop",
            "A data structure",
        ],
        "correct_answer": "A function that has access to variables in its outer scope",
        "category": "syntax",
        "difficulty": "intermediate",
        "language": None,
        "explanation": "A closure keeps the enclosing scope alive after the outer function returns.",
    },
    {
        "question": "Explain the difference between stack and queue data structures.",
        "type": "conceptual",
        "correct_answer": "Stack is LIFO (Last In First Out), Queue is FIFO (First In First Out)",
        "category": "data_structures",
        "difficulty": "advanced",
        "language": None,
        "explanation": "A stack pops the newest element first, a queue the oldest.",
    },
    {
        "question": "What is memoization and when would you use it?",
        "type": "conceptual",
        "correct_answer": "Memoization is caching function results to avoid redundant calculations, used for optimization",
        "category": "algorithms",
        "difficulty": "advanced",
        "language": None,
        "explanation": "Results of expensive calls are stored and reused for repeated inputs.",
    },
    {
        "question": "What is a hash table and what is its average time complexity for lookups?",
        "type": "conceptual",
        "correct_answer": "A data structure that maps keys to values, O(1) average time complexity",
        "category": "data_structures",
        "difficulty": "advanced",
        "language": None,
        "explanation": "Keys are hashed to bucket indices, giving constant time lookups on average.",
    },
    {
        "question": "What is the event loop in JavaScript?",
        "type": "conceptual",
        "correct_answer": "A mechanism that handles asynchronous operations by continuously checking the call stack and callback queue",
        "category": "syntax",
        "difficulty": "advanced",
        "language": "javascript",
        "explanation": "The event loop moves queued callbacks onto the call stack whenever it is empty.",
    },
]

PROGRAMMING_TASKS = [
    {
        "title": "Reverse a String",
        "description": 'Write a function that takes a string and returns it reversed. For example, "hello" becomes "olleh".',
        "language": "python",
        "difficulty": "beginner",
        "category": "algorithms",
        "starter_code": "def reverse_string(s):\n    # Your code here\n    pass",
        "hints": [
            "Think about how to iterate through the string",
            "You can use slicing in Python",
            "Or build a new string character by character",
        ],
        "solution": "def reverse_string(s):\n    return s[::-1]",
        "test_cases": [{"input": "hello", "expected": "olleh"}, {"input": "", "expected": ""}],
    },
    {
        "title": "Find Maximum in Array",
        "description": "Write a function that finds and returns the maximum value in an array of numbers.",
        "language": "javascript",
        "difficulty": "beginner",
        "category": "algorithms",
        "starter_code": "function findMax(arr) {\n    // Your code here\n}",
        "hints": [
            "Initialize a variable to track the maximum",
            "Loop through the array",
            "Compare each element with the current maximum",
        ],
        "solution": (
            "function findMax(arr) {\n    let max = arr[0];\n    for (let i = 1; i < arr.length; i++) {\n"
            "        if (arr[i] > max) max = arr[i];\n    }\n    return max;\n}"
        ),
        "test_cases": [{"input": [3, 9, 2], "expected": 9}],
    },
    {
        "title": "Check Palindrome",
        "description": "Write a function that checks whether a string reads the same forwards and backwards.",
        "language": "python",
        "difficulty": "intermediate",
        "category": "algorithms",
        "starter_code": "def is_palindrome(s):\n    # Your code here\n    pass",
        "hints": [
            "Remove spaces and convert to lowercase",
            "Compare the string with its reverse",
            "Or use two pointers",
        ],
        "solution": 'def is_palindrome(s):\n    s = s.lower().replace(" ", "")\n    return s == s[::-1]',
        "test_cases": [{"input": "Never odd or even", "expected": True}, {"input": "python", "expected": False}],
    },
    {
        "title": "Binary Search",
        "description": "Implement binary search over a sorted array. Return the index of the target, or -1 when absent.",
        "language": "javascript",
        "difficulty": "intermediate",
        "category": "algorithms",
        "starter_code": "function binarySearch(arr, target) {\n    // Your code here\n}",
        "hints": [
            "Use two pointers: left and right",
            "Calculate the middle index",
            "Compare the target with the middle element and move a pointer",
        ],
        "solution": (
            "function binarySearch(arr, target) {\n    let left = 0, right = arr.length - 1;\n"
            "    while (left <= right) {\n        const mid = Math.floor((left + right) / 2);\n"
            "        if (arr[mid] === target) return mid;\n        if (arr[mid] < target) left = mid + 1;\n"
            "        else right = mid - 1;\n    }\n    return -1;\n}"
        ),
        "test_cases": [{"input": [[1, 3, 5, 7], 5], "expected": 2}, {"input": [[1, 3], 4], "expected": -1}],
    },
]


async def _is_empty(db: AsyncSession, model) -> bool:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one() == 0


async def seed_content(db: AsyncSession) -> None:
    """Insert the default questions and tasks if their tables are empty."""
    if await _is_empty(db, AssessmentQuestion):
        db.add_all(AssessmentQuestion(**q) for q in ASSESSMENT_QUESTIONS)
        logger.info("Seeded %d assessment questions", len(ASSESSMENT_QUESTIONS))
    if await _is_empty(db, ProgrammingTask):
        db.add_all(ProgrammingTask(**t) for t in PROGRAMMING_TASKS)
        logger.info("Seeded %d programming tasks", len(PROGRAMMING_TASKS))
    await db.commit()
