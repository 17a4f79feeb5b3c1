"""Entry point for `python -m lessonhub`."""

from lessonhub.main import run

if __name__ == "__main__":
    run()
