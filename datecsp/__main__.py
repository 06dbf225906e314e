"""
Entry point for running the scheduler as a module.

Usage:
    python -m datecsp solve problem.json -o schedule.json
    python -m datecsp validate problem.json
    python -m datecsp check problem.json schedule.json
    python -m datecsp generate problem.json --meetings 6 --seed 1
"""

from datecsp.cli import main

if __name__ == "__main__":
    main()
