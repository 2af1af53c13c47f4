"""Interactive session state machine."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Optional

from ..display import render_help, render_language_table
from ..errors import LanguageNotFound, TranError
from ..languages import LanguageResolver, ResolvedLanguage
from ..translation import PhraseBook


class MessageKind(Enum):
    """What a message reports, used to pick its colour."""
    INFO = "info"
    STATE = "state"
    ERROR = "error"
    RESULT = "result"


@dataclass(frozen=True)
class Message:
    """A line of output produced by a transition."""
    kind: MessageKind
    text: str


@dataclass(frozen=True)
class SessionState:
    """Current languages of a session.

    Attributes:
        source: Source language code.
        target: Target language code.
    """
    source: str
    target: str


@dataclass
class Transition:
    """Result of applying one input line.

    Attributes:
        state: State after the input.
        messages: Output to show, in order.
        closed: True when the session has ended.
    """
    state: SessionState
    messages: list[Message] = field(default_factory=list)
    closed: bool = False


TranslateFunc = Callable[[str, str, str], str]
ReadLine = Callable[[str], str]
Emit = Callable[[Message], None]

FAREWELL = "Leaving tran."


class Session:
    """Interprets single-letter commands and text to translate.

    `step` computes a transition from a given state without touching
    `self.state`; `apply` steps from the current state and keeps the result.
    """

    def __init__(
        self,
        resolver: LanguageResolver,
        translate: TranslateFunc,
        default_source: ResolvedLanguage,
        default_target: ResolvedLanguage,
        phrases: Optional[PhraseBook] = None
    ):
        """Initialize the session.

        Args:
            resolver: Resolver for language commands.
            translate: Backend call of (text, source, target).
            default_source: Language restored by a bare "s".
            default_target: Language restored by a bare "t".
            phrases: Phrase book consulted before the backend.
        """
        self.resolver = resolver
        self.translate = translate
        self.default_source = default_source
        self.default_target = default_target
        self.phrases = phrases if phrases is not None else PhraseBook()
        self.state = SessionState(default_source.code, default_target.code)

    @property
    def prompt(self) -> str:
        return f"{self.state.source}:{self.state.target}> "

    def apply(self, line: str) -> Transition:
        """Apply one input line to the current state."""
        transition = self.step(self.state, line)
        self.state = transition.state
        return transition

    def step(self, state: SessionState, line: str) -> Transition:
        """Compute the transition for one input line.

        Args:
            state: State to start from.
            line: Raw input line.

        Returns:
            The new state and the messages to show.
        """
        line = line.strip()
        if not line:
            return Transition(state)

        if line == "q":
            return Transition(state, [Message(MessageKind.INFO, FAREWELL)], closed=True)
        if line == "h":
            return Transition(state, [Message(MessageKind.INFO, render_help())])
        if line == "l" or line.startswith("l "):
            return Transition(state, [self._list_languages(line[2:].strip())])
        if line == "s" or line.startswith("s "):
            return self._change(state, "source", line[2:].strip())
        if line.startswith("t "):
            return self._change(state, "target", line[2:].strip())
        if line == "t":
            return self._change(state, "target", "")
        # Byte length, so one or two CJK characters are text, not a code.
        if len(line.encode("utf-8")) <= 2:
            return self._change(state, "target", line)
        return Transition(state, [self._translate(state, line)])

    def _list_languages(self, substring: str) -> Message:
        entries = self.resolver.list_matching(substring)
        if not entries:
            return Message(MessageKind.ERROR, str(LanguageNotFound(substring)))
        return Message(MessageKind.INFO, render_language_table(entries))

    def _change(self, state: SessionState, which: str, query: str) -> Transition:
        """Resolve `query` (empty for the default) and set source or target."""
        current = getattr(state, which)
        if not query:
            language = self.default_source if which == "source" else self.default_target
        else:
            try:
                language = self.resolver.resolve(query)
            except LanguageNotFound as e:
                return Transition(state, [Message(MessageKind.ERROR, str(e))])

        if language.code == current:
            return Transition(state)

        notice = (
            f"{which.capitalize()} changed: "
            f"{self.resolver.name_for(current)} ({current}) -> "
            f"{language.name} ({language.code})"
        )
        new_state = replace(state, **{which: language.code})
        return Transition(new_state, [Message(MessageKind.STATE, notice)])

    def _translate(self, state: SessionState, text: str) -> Message:
        phrase = self.phrases.lookup(text, state.target)
        if phrase is not None:
            return Message(MessageKind.RESULT, phrase)
        try:
            out = self.translate(text, state.source, state.target)
        except TranError as e:
            return Message(MessageKind.ERROR, str(e))
        return Message(MessageKind.RESULT, out)


def interact(session: Session, read_line: ReadLine, emit: Emit) -> SessionState:
    """Drive a session until quit or end of input.

    Args:
        session: Session to drive.
        read_line: Prompt reader; raises EOFError at end of input.
        emit: Receives each message as it is produced.

    Returns:
        The final session state.
    """
    while True:
        try:
            line = read_line(session.prompt)
        except EOFError:
            break
        transition = session.apply(line)
        for message in transition.messages:
            emit(message)
        if transition.closed:
            break
    return session.state
