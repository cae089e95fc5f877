INITIAL_EASE = 2.5
MIN_EASE = 1.3
FAIL_EASE_PENALTY = 0.2
EASE_STEP = 0.1    # per quality point above/below 3
EASE_PRECISION = 2

SUCCESS_THRESHOLD = 3
FAIL_INTERVAL_DAYS = 1
FIRST_INTERVALS = {
    1: 1,              # 1 day after first success
    2: 3,              # 3 days after second
}

# Mastery: each signal is normalized against its cap, then weighted
MASTERY_MAX_INTERVAL_DAYS = 365
MASTERY_MAX_EASE = 2.5
MASTERY_MAX_REPETITIONS = 10
MASTERY_WEIGHTS = {
    "interval": 0.4,
    "ease": 0.3,
    "repetitions": 0.3,
}

MAX_SESSION_ROUNDS = 5
