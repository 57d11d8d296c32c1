"""Allow ``python -m expcat_skills`` (used by the elevated relaunch)."""

from expcat_skills.cli import app

if __name__ == "__main__":
    app(prog_name="expcat-skills")
