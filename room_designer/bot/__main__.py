"""Entry point for running bot as module."""

from room_designer.bot.main import run

if __name__ == "__main__":
    run()
