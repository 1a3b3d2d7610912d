# Main.py
""""" Entry point for the calculator's interactive prompt.

   Responsibilities:
   - Verify required files exist in development mode
   - Load configuration and set up logging
   - Read expressions line by line and hand them to the engine

   Every line shares one scope, so "x = 5" on one line can be used as "x + 1"
   on the next. Lines starting with ':' are commands (see HELP_TEXT).
"""""
import logging
import sys
from pathlib import Path

import pyperclip

from CalcEngine import config_manager as config_manager
from CalcEngine import error as E
from CalcEngine.CodeGen import format_number
from CalcEngine.Evaluator import UserFunction
from CalcEngine.MathEngine import calculate, render, simplify
from CalcEngine.Parser import parse_expression
from CalcEngine.StepTracker import evaluate_with_steps

PROJECT_ROOT = Path(__file__).resolve().parent

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  :history           show previous inputs and results
  :copy              copy the last result to the clipboard
  :simplify <expr>   show the simplified expression
  :steps <expr>      evaluate and show every step
  :vars              list defined variables and functions
  :set <key> <value> change a setting (saved to config.json)
  :error <code>      explain an error code
  :help              show this text
  :quit              leave"""


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
    """

    modules_dir = PROJECT_ROOT / "CalcEngine"

    REQUIRED = [
        modules_dir / "MathEngine.py",
        modules_dir / "Parser.py",
        modules_dir / "Evaluator.py",
        modules_dir / "config_manager.py",
        modules_dir / "config.json",
    ]

    missing_files = [file_path.name for file_path in REQUIRED if not file_path.exists()]

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


class Session:
    """State of one interactive run: shared scope, history and last result."""

    def __init__(self):
        self.scope = {}
        self.history = []
        self.last_result = None

    def handle_line(self, line):
        """Process one input line and return the text to print (None to quit)."""
        line = line.strip()
        if not line:
            return ""
        if line.startswith(":"):
            return self.run_command(line)

        settings = config_manager.load_setting_value("all")
        if settings["show_steps"]:
            return self.show_steps(line, settings)

        try:
            ergebnis = calculate(line, self.scope, settings)
        except E.MathError as e:
            logger.debug("Calculation failed", exc_info=True)
            return f"Error {e.code}: {e.message}"

        self.history.append((line, ergebnis))
        self.last_result = ergebnis
        return ergebnis

    def show_steps(self, problem, settings):
        try:
            ergebnis, steps = evaluate_with_steps(parse_expression(problem), self.scope,
                                                  degrees=settings["degree_mode"])
        except E.MathError as e:
            logger.debug("Calculation failed", exc_info=True)
            return f"Error {e.code}: {e.message}"
        # Same wrapping as calculate(), e.g. RecursionError on very deep nesting
        except Exception as e:
            logger.debug("Calculation failed", exc_info=True)
            error = E.MathError(message=f"Unexpected Error: {e}", code="9999", equation=problem)
            return f"Error {error.code}: {error.message}"

        rendered = render(ergebnis, settings)
        self.history.append((problem, rendered))
        self.last_result = rendered
        lines = [f"{step.id + 1}. {step.description}: {step.expression}" for step in steps]
        lines.append(rendered)
        return "\n".join(lines)

    def run_command(self, line):
        command, _, argument = line[1:].partition(" ")
        argument = argument.strip()

        if command in ("quit", "exit", "q"):
            return None

        elif command == "help":
            return HELP_TEXT

        elif command == "history":
            if not self.history:
                return "(empty)"
            return "\n".join(f"{problem}  {ergebnis}" for problem, ergebnis in self.history)

        elif command == "copy":
            if self.last_result is None:
                return "Nothing to copy."
            text = self.last_result.lstrip("=≈ ")
            try:
                pyperclip.copy(text)
            except pyperclip.PyperclipException as e:
                return f"Clipboard not available: {e}"
            return f"Copied: {text}"

        elif command == "vars":
            if not self.scope:
                return "(none)"
            lines = []
            for name, value in self.scope.items():
                if isinstance(value, UserFunction):
                    lines.append(f"{name}({', '.join(value.params)})")
                else:
                    lines.append(f"{name} = {format_number(value)}")
            return "\n".join(lines)

        elif command == "simplify":
            try:
                return simplify(argument)
            except E.MathError as e:
                return f"Error {e.code}: {e.message}"

        elif command == "steps":
            return self.show_steps(argument, config_manager.load_setting_value("all"))

        elif command == "error":
            if argument not in E.ERROR_MESSAGES:
                return f"Unknown error code: {argument}"
            return f"{argument}: {E.ERROR_MESSAGES[argument].rstrip(': ')}"

        elif command == "set":
            key_value, _, raw_value = argument.partition(" ")
            try:
                config_manager.update_setting(key_value, raw_value.strip())
            except E.MathError as e:
                return f"Error {e.code}: {e.message}"
            return f"{key_value} = {config_manager.load_setting_value(key_value)}"

        return f"Unknown command ':{command}'. Type :help for a list."


def main():

    """
    Load configuration and run the prompt until EOF or :quit.
    """

    all_settings = config_manager.load_setting_value("all")
    logging.basicConfig(
        level=logging.DEBUG if all_settings["debug"] else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Config loaded: %s", all_settings)

    session = Session()
    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        output = session.handle_line(line)
        if output is None:
            break
        if output:
            print(output)


if __name__ == "__main__":
    check_files_exist()
    main()
