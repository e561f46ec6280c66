#!/usr/bin/env python3
"""
Chat Client Script

Talks to a running coach backend, or previews the prompt it would build.

Usage:
    # Send one message
    python scripts/chat_client.py --message "How do I return a lob?"

    # Interactive mode (the thread is kept here, the server is stateless)
    python scripts/chat_client.py --interactive

    # Show model, finish reason and token usage
    python scripts/chat_client.py --message "Hi" --debug

    # Print the upstream payload without any network call
    python scripts/chat_client.py --message "Hi" --preview
"""

import sys
import json
import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import httpx
from rich.console import Console
from rich.panel import Panel
from rich.markdown import Markdown
from rich.syntax import Syntax
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from config.settings import get_settings
from coach.context.assembler import PromptAssembler
from coach.context.schema import parse_chat_request

console = Console()


SAMPLE_CONTEXT_PACK = {
    "coachPersona": "You are Marta, an encouraging padel coach. Be concrete and brief.",
    "playerProfile": "Intermediate right-handed player, usually plays the left side.",
    "recentMatchesSummary": "Lost 2 of the last 3 matches. Many unforced errors on the bandeja.",
    "constraints": "Answer in at most 120 words. Suggest one drill per answer.",
}


def load_context_pack(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return dict(SAMPLE_CONTEXT_PACK)

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        console.print(f"[red]Context file must hold a JSON object: {path}[/]")
        sys.exit(1)
    return data


def build_body(message: str, context_pack: Dict, turns: List[Dict]) -> Dict[str, Any]:
    body: Dict[str, Any] = {"userMessage": message, "contextPack": context_pack}
    if turns:
        body["thread"] = {"turns": turns}
    return body


def preview(body: Dict[str, Any]):
    """Print what the backend would send upstream"""
    settings = get_settings()
    request = parse_chat_request(body)
    payload = PromptAssembler.from_settings(settings).assemble_request(request)

    console.print(Panel(payload.system_instruction or "[dim](empty)[/]", title="System Instruction", border_style="blue"))
    console.print(Syntax(json.dumps(payload.to_request_body(), indent=2), "json"))


def send(url: str, body: Dict[str, Any], debug: bool) -> Optional[str]:
    """POST one chat request and print the reply"""
    params = {"debug": "1"} if debug else None

    try:
        response = httpx.post(f"{url.rstrip('/')}/coach/chat", json=body, params=params, timeout=None)
    except httpx.HTTPError as e:
        console.print(f"[red]Request failed: {e}[/]")
        return None

    data = response.json()

    if response.status_code != 200:
        console.print(f"[red]{response.status_code}[/] {data.get('error')}")
        if "detail" in data:
            console.print(f"  Upstream status: {data.get('status')}")
            console.print(f"  Detail: {data.get('detail')}")
        return None

    reply = data["reply"]
    console.print(Panel(Markdown(reply), title="Coach", border_style="green"))

    if debug and "meta" in data:
        meta = data["meta"]
        console.print(f"  Model: [cyan]{meta.get('model')}[/]")
        console.print(f"  Finish reason: [cyan]{meta.get('finishReason')}[/]")
        console.print(f"  Usage: [cyan]{meta.get('usage')}[/]")

    return reply


def interactive_mode(url: str, context_pack: Dict, debug: bool):
    """Chat loop that keeps the thread client-side"""
    console.print("[bold]Interactive Mode[/] - Type 'quit' to exit\n")

    turns: List[Dict[str, str]] = []

    while True:
        try:
            message = console.input("[bold blue]You>[/] ")

            if message.lower() in ['quit', 'exit', 'q']:
                break

            if not message.strip():
                continue

            reply = send(url, build_body(message, context_pack, turns), debug)
            if reply is None:
                continue

            turns.append({"role": "user", "text": message})
            turns.append({"role": "model", "text": reply})

        except KeyboardInterrupt:
            console.print("\n")
            break

    console.print("Goodbye!")


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Chat with the WePadel coach backend")
    parser.add_argument("--message", "-m", help="Send a single message")
    parser.add_argument("--interactive", "-i", action="store_true", help="Interactive mode")
    parser.add_argument("--url", default=f"http://localhost:{settings.port}", help="Backend base URL")
    parser.add_argument("--context", help="JSON file with the context pack (default: sample pack)")
    parser.add_argument("--debug", action="store_true", help="Request debug metadata")
    parser.add_argument("--preview", action="store_true", help="Print the upstream payload, no network")

    args = parser.parse_args()
    context_pack = load_context_pack(args.context)

    console.print("\n[bold]WePadel Coach - Chat Client[/bold]\n")

    if args.interactive:
        interactive_mode(args.url, context_pack, args.debug)
    elif args.message:
        body = build_body(args.message, context_pack, [])
        if args.preview:
            preview(body)
        else:
            send(args.url, body, args.debug)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
