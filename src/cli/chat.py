"""
Terminal-based Product Chat Interface.

This module provides the interactive loop: read a query, run the query
graph, print the suggested products, repeat.

Features:
- Rich formatted output
- Command history (up/down arrow keys) via prompt_toolkit
- Defined exits: 'quit' / 'exit' / 'q', Ctrl+D (end of input) or Ctrl+C
- Errors inside one query are shown and the loop keeps going
"""

from pathlib import Path
from typing import List
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from src.agent.state import initial_state


EXIT_COMMANDS = {'quit', 'exit', 'q'}
PROMPT = "\nWhat are you looking for? "


class ChatCLI:
    """
    Terminal chat interface for product search.

    Uses Rich for formatting and prompt_toolkit for input with history.
    """

    def __init__(self, query_graph, history_file: Path = Path(".chat_history"),
                 console: Console = None, session=None):
        """
        Initialize the chat CLI.

        Args:
            query_graph: Compiled query graph (see create_query_graph)
            history_file: Where prompt history is kept
            console: Output console (defaults to stdout)
            session: Anything with a prompt(message) method; defaults to
                     a PromptSession backed by history_file
        """
        self.console = console if console is not None else Console()
        self.graph = query_graph
        self.session = session if session is not None else PromptSession(
            history=FileHistory(str(history_file))
        )

    def print_welcome(self):
        """Display welcome message."""
        welcome_text = Text()
        welcome_text.append("Product Chatbot\n", style="bold blue")
        welcome_text.append("Semantic search powered by OpenAI embeddings + Qdrant\n\n", style="dim")
        welcome_text.append("Commands:\n", style="bold")
        welcome_text.append("  • Describe what you need and press Enter\n")
        welcome_text.append("  • 'quit' or 'exit' to end the session\n")
        welcome_text.append("  • Ctrl+D or Ctrl+C to leave\n")

        self.console.print(Panel(welcome_text, border_style="blue"))

    def print_lines(self, lines: List[str]):
        """
        Display the rendered result lines.

        Product names come from the catalog, so markup is disabled.
        """
        for line in lines:
            self.console.print(line, markup=False, highlight=False)

    def print_error(self, error: str):
        """Display error message."""
        self.console.print(f"\n[bold red]Error:[/bold red] {escape(error)}")

    def print_goodbye(self):
        self.console.print("[bold blue]Goodbye![/bold blue]\n")

    def answer(self, query: str) -> List[str]:
        """
        Run the query graph for one query.

        Args:
            query: User query

        Returns:
            List[str]: Lines to display
        """
        final_state = self.graph.invoke(initial_state(query))
        return final_state["lines"]

    def run(self):
        """
        Main chat loop.

        AwaitingInput → (graph: Embedding → Searching → Rendering) → AwaitingInput.
        Runs until an exit command, end of input, or Ctrl+C.
        """
        self.print_welcome()

        while True:
            try:
                user_input = self.session.prompt(PROMPT)

                if user_input.lower().strip() in EXIT_COMMANDS:
                    self.print_goodbye()
                    break

                # Skip empty inputs
                if not user_input.strip():
                    continue

                self.print_lines(self.answer(user_input.strip()))

            except EOFError:
                # Ctrl+D / closed stdin
                self.console.print()
                self.print_goodbye()
                break

            except KeyboardInterrupt:
                self.console.print("\n\n[bold yellow]Interrupted[/bold yellow]")
                self.print_goodbye()
                break

            except Exception as e:
                # Display errors but don't crash
                self.print_error(str(e))
