"""
`python -m schedule_store replay commands.json` runs the same CLI as the
`schedule-store` console script.
"""

from schedule_store.cli import main

if __name__ == "__main__":
    main()
