"""
Replay command: dispatch a JSONL file of actions into a fresh store
"""

import importlib
import json
from pathlib import Path
from typing import Any, Callable, Dict, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from ...core import apply_middleware, create_store
from ...core.actions import action_type_of
from ...core.canonical import canonical_json_str, canonicalize, state_digest
from ...interceptors import create_logger
from ...logging_config import setup_logging
from ...replay import replay as replay_actions

console = Console()


class ActionFileError(ValueError):
    """Raised when an actions file line is not a JSON object."""
    pass


def load_reducer(path: str) -> Callable[[Any, Any], Any]:
    """
    Import a reducer from "package.module:attribute".

    Raises:
        ValueError: If path has no ":" separator or does not name a callable
        ImportError: If the module cannot be imported
        AttributeError: If the attribute does not exist
    """
    module_name, sep, attr_path = path.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Reducer path must look like 'package.module:attribute', got {path!r}")

    obj: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    if not callable(obj):
        raise ValueError(f"{path!r} is not callable")
    return obj


def read_actions(path: Path) -> List[Dict[str, Any]]:
    """
    Read one JSON object per non-blank line.

    Raises:
        FileNotFoundError: If path does not exist
        ActionFileError: If a line is not a JSON object
        UnicodeDecodeError: If the file is not UTF-8
    """
    actions = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                action = json.loads(line)
            except json.JSONDecodeError as e:
                raise ActionFileError(f"line {lineno}: invalid JSON ({e.msg})") from e
            if not isinstance(action, dict):
                raise ActionFileError(f"line {lineno}: expected a JSON object")
            actions.append(action)
    return actions


def _fail(message: str, json_output: bool, code: int, **extra: Any) -> NoReturn:
    if json_output:
        print(json.dumps({"success": False, "error": message, **extra}))
    else:
        console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code)


def replay_command(
    reducer_path: str = typer.Option(..., "--reducer", "-r", help="Reducer as package.module:attribute"),
    actions_path: Path = typer.Option(..., "--actions", "-a", help="JSONL file, one action per line"),
    until: Optional[int] = typer.Option(None, "--until", "-u", min=0, help="Stop after N actions"),
    show_state: bool = typer.Option(False, "--show-state", "-s", help="Show final state"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    log_actions: bool = typer.Option(False, "--log-actions", help="Log each action via the logger middleware"),
):
    """
    Replay actions into a new store and summarize the result.

    Examples:
        statecell replay -r myapp.reducers:root -a actions.jsonl
        statecell replay -r myapp.reducers:root -a actions.jsonl --until 10 --show-state
        statecell replay -r myapp.reducers:root -a actions.jsonl --json
    """
    try:
        reducer = load_reducer(reducer_path)
    except (ImportError, AttributeError, ValueError) as e:
        _fail(f"Cannot load reducer {reducer_path!r}: {e}", json_output, 1)
    except Exception as e:
        _fail(f"Cannot load reducer {reducer_path!r}: {type(e).__name__}: {e}", json_output, 1)

    try:
        actions = read_actions(actions_path)
    except FileNotFoundError:
        _fail("Actions file not found", json_output, 2, path=str(actions_path))
    except ActionFileError as e:
        _fail(f"{actions_path}: {e}", json_output, 1)
    except UnicodeDecodeError as e:
        _fail(f"{actions_path}: not valid UTF-8 ({e.reason} at byte {e.start})", json_output, 1)
    except OSError as e:
        _fail(f"Cannot read {actions_path}: {e}", json_output, 1)

    enhancer = None
    if log_actions:
        setup_logging()
        enhancer = apply_middleware(create_logger())

    try:
        store = create_store(reducer, enhancer=enhancer)
        result = replay_actions(store, actions, until=until)
    except Exception as e:
        _fail(f"{type(e).__name__}: {e}", json_output, 1)

    action_counts: Dict[str, int] = {}
    for action in actions[:result.applied]:
        key = str(action_type_of(action))
        action_counts[key] = action_counts.get(key, 0) + 1

    digest = state_digest(result.state)

    if json_output:
        output = {
            "success": True,
            "actions_replayed": result.applied,
            "notifications": result.notifications,
            "state_hash": digest,
            "action_counts": action_counts,
        }
        if show_state:
            output["state"] = canonicalize(result.state)
        print(json.dumps(output, indent=2, default=repr))
        return

    console.print(f"[green]✓ Replayed {result.applied} actions successfully[/green]")
    console.print(f"  Notifications: [cyan]{result.notifications}[/cyan]")
    console.print(f"  State hash: [yellow]{digest}[/yellow]")

    table = Table(title="Action Counts")
    table.add_column("Action Type", style="green")
    table.add_column("Count", style="cyan", justify="right")
    for action_type in sorted(action_counts):
        table.add_row(action_type, str(action_counts[action_type]))
    console.print(table)

    if show_state:
        console.print("\n[bold]Final State:[/bold]")
        state_json = json.dumps(json.loads(canonical_json_str(result.state)), indent=2)
        console.print(Syntax(state_json, "json", theme="monokai"))
