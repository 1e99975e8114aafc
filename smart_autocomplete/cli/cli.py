"""
cli.py - interactive autocomplete shell
Features:
- Type a prefix, get ranked suggestions in a Rich table
- Accept by number or by typing the token; accepted tokens feed frequency + graph
- Learn phrases from whole lines (:phrase) and list them (:phrases)
- Undo/redo of accepted tokens, substring fallback toggle, graph view, stats
- Settings live in a JSON config inside the data directory
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from smart_autocomplete.core.engine import AutocompleteEngine
from smart_autocomplete.core.models import RankedCandidate
from smart_autocomplete.utils.config_manager import Config
from smart_autocomplete.utils.logger_utils import Log

DEFAULT_DATA_DIR = "data"
FREQ_FILE = "frequencies.txt"
PHRASE_FILE = "phrases.txt"
GRAPH_FILE = "graph.txt"
SEED_FILE = "seeds.txt"
CONFIG_FILE = "config.json"
LOG_FILE = os.path.join("logs", "autocomplete.log")

HELP_ROWS = [
    (":help", "Show this help message"),
    (":exit, :q", "Exit the program"),
    (":bump <token> [n]", "Increase frequency of a token"),
    (":undo", "Undo last accepted token"),
    (":redo", "Redo last undone token"),
    (":toggle_contains", "Toggle substring search"),
    (":graph", "Display co-occurrence graph"),
    (":phrase <line>", "Save a line as a phrase (trigger = first word)"),
    (":phrases <trigger>", "List learned phrases for a trigger"),
    (":stats", "Engine statistics"),
    (":reset", "Forget last token and cached results"),
    (":config [key value]", "Show or change a setting"),
]


def build_engine(data_dir: str, cfg: Config, seeds: Optional[str] = None) -> AutocompleteEngine:
    """Wire an engine to the standard files inside data_dir."""
    os.makedirs(data_dir, exist_ok=True)
    ecfg = cfg.engine_config()
    engine = AutocompleteEngine(
        config=ecfg,
        freq_path=os.path.join(data_dir, FREQ_FILE),
        phrase_path=os.path.join(data_dir, PHRASE_FILE),
        graph_path=os.path.join(data_dir, GRAPH_FILE) if ecfg.persist_graph else None,
    )
    engine.load_seeds(seeds or os.path.join(data_dir, SEED_FILE))
    return engine


class CLI:
    """Command loop: prefix -> suggestions -> optional acceptance."""

    def __init__(self, engine: AutocompleteEngine, cfg: Optional[Config] = None, console: Optional[Console] = None):
        self.engine = engine
        self.cfg = cfg or Config(path=None)
        self.console = console or Console()
        self.running = True

    def run(self) -> None:
        self.console.rule("[bold magenta]Smart Autocomplete[/bold magenta]")
        self.console.print("[cyan]Type a prefix for suggestions, ':help' for commands, ':q' to quit.[/cyan]\n")

        while self.running:
            try:
                line = Prompt.ask("[green]>[/green]", default="", show_default=False, console=self.console)
                self.handle_line(line)
            except (EOFError, KeyboardInterrupt):
                self._exit()
            except Exception as e:
                Log.error(f"[CLI] {type(e).__name__}: {e}")
                self.console.print(f"[red]Error:[/red] {e}")

    def handle_line(self, line: str) -> None:
        line = line.strip()
        if not line:
            return
        if line.startswith(":"):
            self.handle_command(line)
            return
        self._query(line)

    # COMMAND HANDLING -----------------------------------------------------------
    def handle_command(self, cmd: str) -> None:
        name, _, rest = cmd.partition(" ")
        rest = rest.strip()

        if name in (":exit", ":q", ":quit"):
            self._exit()
        elif name == ":help":
            self._show_help()
        elif name == ":bump":
            self._bump(rest)
        elif name == ":undo":
            self._history(self.engine.undo(), "Undo: removed")
        elif name == ":redo":
            self._history(self.engine.redo(), "Redo: restored")
        elif name == ":toggle_contains":
            on = self.engine.toggle_substring_search()
            self.console.print(f"Substring search: [bold]{'ON' if on else 'OFF'}[/bold]")
        elif name == ":graph":
            self._show_graph()
        elif name == ":phrase":
            self._learn_phrase(rest)
        elif name == ":phrases":
            self._show_phrases(rest)
        elif name == ":stats":
            self._show_stats()
        elif name == ":reset":
            self.engine.session.reset()
            self.console.print("[yellow]Session cleared.[/yellow]")
        elif name == ":config":
            self._config(rest)
        else:
            self.console.print(f"[red]Unknown command:[/red] {escape(cmd)}")

    # CORE INPUT PROCESSING ---------------------------------------------------------------
    def _query(self, prefix: str) -> None:
        suggestions = self.engine.suggest(prefix)
        if not suggestions:
            self.console.print(f"[dim]No suggestions found for '{escape(prefix)}'[/dim]")
            return

        self._display_suggestions(suggestions)
        choice = Prompt.ask(
            "Accept by number or token (Enter to skip)", default="", show_default=False, console=self.console
        )
        self.accept_choice(choice, suggestions, prefix)

    def accept_choice(self, choice: str, suggestions: List[RankedCandidate], prefix: str = "") -> Optional[str]:
        """Resolve a number or literal token against the shown suggestions and accept it."""
        choice = choice.strip()
        if not choice:
            return None

        picked: Optional[RankedCandidate] = None
        if choice.isdecimal():
            n = int(choice)
            if 1 <= n <= len(suggestions):
                picked = suggestions[n - 1]
            else:
                self.console.print("[red]Invalid selection[/red]")
                return None
        else:
            picked = next((s for s in suggestions if s.text == choice), None)
            if picked is None:
                self.console.print("[red]Token not in suggestions[/red]")
                return None

        trigger = prefix if picked.source == "phrase" else None
        self.engine.accept(picked.text, trigger=trigger)
        self.console.print(f"[green]Accepted:[/green] {escape(picked.text)}  [dim]({picked.source})[/dim]")
        return picked.text

    # DISPLAY -------------------------------------------------------------------------------
    def _display_suggestions(self, suggestions: List[RankedCandidate]) -> None:
        table = Table(title="Suggestions", box=box.SIMPLE, show_edge=False)
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Text", style="bold")
        table.add_column("Score", justify="right", style="magenta")
        table.add_column("Source", style="dim")
        for i, s in enumerate(suggestions, 1):
            style = "green" if s.source == "phrase" else ("yellow" if s.source == "substring" else "")
            table.add_row(str(i), Text(s.text, style=style), f"{s.score:.3f}", s.source)
        self.console.print(table)

    def _show_help(self) -> None:
        table = Table(title="Commands", box=box.SIMPLE)
        table.add_column("Command", style="cyan")
        table.add_column("Description")
        for cmd, desc in HELP_ROWS:
            table.add_row(Text(cmd), Text(desc))
        self.console.print(table)
        self.console.print("[dim]Type a prefix to get suggestions; select by number or type the full token.[/dim]")

    def _show_graph(self) -> None:
        lines = self.engine.graph.describe()
        body = "\n".join(lines) if lines else "(empty)"
        self.console.print(Panel(Text(body), title="Co-occurrence Graph", border_style="cyan"))

    def _show_phrases(self, trigger: str) -> None:
        if not trigger:
            triggers = self.engine.phrases.triggers()
            self.console.print("Triggers: " + (escape(", ".join(triggers)) if triggers else "(none)"))
            return
        phrases = self.engine.phrases.get_phrases(trigger)
        if not phrases:
            self.console.print(f"[dim]No phrases for '{escape(trigger)}'[/dim]")
            return
        table = Table(title=f"Phrases for '{escape(trigger)}'", box=box.MINIMAL)
        table.add_column("Snippet")
        table.add_column("Uses", justify="right")
        for p in phrases:
            table.add_row(Text(p.snippet), str(p.use_count))
        self.console.print(table)

    def _show_stats(self) -> None:
        table = Table(title="Engine", box=box.MINIMAL)
        table.add_column("Metric", style="cyan")
        table.add_column("Value")
        for key, val in self.engine.stats().items():
            table.add_row(key, Text(str(val)))
        self.console.print(table)

    # ACTIONS --------------------------------------------------------------------------
    def _bump(self, rest: str) -> None:
        parts = rest.split()
        if not parts or len(parts) > 2:
            self.console.print("[red]Usage:[/red] " + escape(":bump <token> [n]"))
            return
        amount = None
        if len(parts) == 2:
            if not parts[1].isdecimal():
                self.console.print("[red]Amount must be a non-negative integer[/red]")
                return
            amount = int(parts[1])
        if self.engine.bump(parts[0], amount):
            n = self.engine.config.bump_amount if amount is None else amount
            self.console.print(f"Bumped frequency of '{escape(parts[0])}' by {n}")
        else:
            self.console.print(f"[red]Cannot bump[/red] '{escape(parts[0])}'")

    def _history(self, res, verb: str) -> None:
        if res.ok:
            self.console.print(f"{verb} '{escape(res.edit.text)}'")
        else:
            self.console.print(f"[yellow]{res.message}[/yellow]")

    def _learn_phrase(self, line: str) -> None:
        phrase = self.engine.learn_line(line)
        if phrase is None:
            self.console.print("[red]Phrase not saved[/red] (empty line, no trigger, or too short)")
            return
        self.console.print(f"[green]Phrase saved:[/green] '{escape(phrase.trigger)}' -> '{escape(phrase.snippet)}'")

    def _config(self, rest: str) -> None:
        parts = rest.split(None, 1)
        if not parts:
            table = Table(title="Config", box=box.MINIMAL)
            table.add_column("Key", style="cyan")
            table.add_column("Value")
            for k, v in self.cfg.show():
                table.add_row(k, str(v))
            self.console.print(table)
            return
        if len(parts) != 2:
            self.console.print("[red]Usage:[/red] :config <key> <value>")
            return
        if self.cfg.set(parts[0], parts[1]):
            self.console.print(f"{parts[0]} = {self.cfg.get(parts[0])} [dim](applies on next start)[/dim]")
        else:
            self.console.print(f"[red]Bad option or value:[/red] {escape(rest)}")

    def _exit(self) -> None:
        self.console.rule("[red]Goodbye![/red]")
        self.running = False


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="smart-autocomplete", description="Interactive autocomplete shell")
    parser.add_argument("--data-dir", default=DEFAULT_DATA_DIR, help="directory holding store files")
    parser.add_argument("--seeds", default=None, help="seed dictionary file (default: <data-dir>/seeds.txt)")
    parser.add_argument("--config", default=None, help="JSON config file (default: <data-dir>/config.json)")
    parser.add_argument("--log-file", default=LOG_FILE, help="log file path")
    parser.add_argument("-v", "--verbose", action="store_true", help="also log to the console")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    Log.setup(args.log_file, console=args.verbose, level=logging.DEBUG if args.verbose else logging.INFO)
    cfg = Config(args.config or os.path.join(args.data_dir, CONFIG_FILE))
    engine = build_engine(args.data_dir, cfg, args.seeds)
    CLI(engine, cfg).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
