"""
Session state for the three-step drill-down.

A conversation moves through three stages:

    idle ──search──▶ searched ──select_pasta──▶ pasta_selected
                        ▲                            │
                        └──────────search────────────┘

Each caller gets its own SessionState, looked up by session id in a
SessionRegistry, so two conversations never see each other's results.
In ``shared`` mode every request maps to one process-wide session, which
is what front-ends that cannot carry a session id rely on.
"""

import time
import uuid
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Callable, Sequence

from boleto_api.errors import NotFoundError, SelectionError, ValidationError
from boleto_api.grouping import group_by_month
from boleto_api.lib import logs
from boleto_api.models.boleto import Boleto, Pasta
from boleto_api.services.boleto_service import BoletoService

LOG = logs.logger(__file__)

SHARED_SESSION_ID = "shared"
MAX_SESSION_ID_LENGTH = 128

MSG_MISSING_QUERY = "CNPJ ou nota_fiscal não informados."
MSG_NOT_FOUND = "Nenhum documento encontrado."
MSG_INVALID_PASTA = "Mês inválido ou nenhuma busca realizada."
MSG_INVALID_BOLETO = "Documento inválido ou nenhum Mês selecionado."


@dataclass
class SessionState:
    """
    The drill-down progress of one conversation.

    Attributes:
        id: Session identifier.
        pastas: Result of the last successful search, or None.
        pasta_selecionada: Pasta chosen after that search, or None.
        last_seen: Monotonic timestamp of the last access.
    """

    id: str
    pastas: tuple[Pasta, ...] | None = None
    pasta_selecionada: Pasta | None = None
    last_seen: float = 0.0
    lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    @property
    def stage(self) -> str:
        if self.pastas is None:
            return "idle"
        if self.pasta_selecionada is None:
            return "searched"
        return "pasta_selected"


def normalize_session_id(value: Any) -> str | None:
    """
    Clean a session id received from a client.

    Returns:
        The stripped id, or None when it is missing, blank or too long.
    """
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not text or len(text) > MAX_SESSION_ID_LENGTH:
        return None
    return text


def parse_index(value: Any) -> int | None:
    """
    Interpret a 1-based index sent by the client.

    Integers, integral floats and digit strings are accepted; anything
    else (booleans, fractions, words, missing) yields None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            return None
    return None


def _pick(items: Sequence[Any] | None, index: Any) -> Any | None:
    position = parse_index(index)
    if items is None or position is None or not 1 <= position <= len(items):
        return None
    return items[position - 1]


class SessionRegistry:
    """
    Thread-safe mapping of session id to SessionState.

    Idle sessions older than ``ttl`` seconds are evicted lazily whenever
    the registry is accessed. In shared mode the process-wide session
    never expires; in token mode "shared" is an ordinary client id.
    """

    def __init__(
        self,
        mode: str = "token",
        ttl: int = 3600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if mode not in ("token", "shared"):
            raise ValueError(f"Unknown session mode: {mode}")
        self.mode = mode
        self.ttl = ttl
        self._clock = clock
        self._sessions: dict[str, SessionState] = {}
        self._lock = Lock()

    @property
    def shared(self) -> bool:
        return self.mode == "shared"

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def open(self, session_id: Any = None) -> SessionState:
        """
        Return the session a search should write to, creating it if needed.

        Without an id a new one is issued (token mode). In shared mode the
        id is ignored.
        """
        sid = SHARED_SESSION_ID if self.shared else normalize_session_id(session_id)
        with self._lock:
            self._evict_expired()
            if sid is None:
                sid = uuid.uuid4().hex
            session = self._sessions.get(sid)
            if session is None:
                session = SessionState(id=sid)
                self._sessions[sid] = session
                LOG.info("Session opened: %s", sid)
            session.last_seen = self._clock()
            return session

    def get(self, session_id: Any = None) -> SessionState | None:
        """Return an existing session, or None if unknown or expired."""
        sid = SHARED_SESSION_ID if self.shared else normalize_session_id(session_id)
        if sid is None:
            return None
        with self._lock:
            self._evict_expired()
            session = self._sessions.get(sid)
            if session is not None:
                session.last_seen = self._clock()
            return session

    def _evict_expired(self) -> None:
        if not self.ttl:
            return
        deadline = self._clock() - self.ttl
        expired = [
            sid
            for sid, session in self._sessions.items()
            if not (self.shared and sid == SHARED_SESSION_ID)
            and session.last_seen < deadline
        ]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            LOG.info("Evicted %d idle session(s)", len(expired))


class BoletoNavigator:
    """
    Runs the search, select_pasta and select_boleto transitions.

    Every method either completes its transition or raises a
    BoletoApiError without touching the session.
    """

    def __init__(self, service: BoletoService, registry: SessionRegistry) -> None:
        self.service = service
        self.registry = registry

    def search(self, query: str, session_id: Any = None) -> tuple[str, list[Pasta]]:
        """
        Look up boletos and store them grouped by month.

        Args:
            query: CNPJ or nota fiscal fragment.
            session_id: Session to write to; a new one is issued if omitted.

        Returns:
            The session id and the pastas found.

        Raises:
            ValidationError: If the query is blank.
            NotFoundError: If nothing matched.
            StoreError: If the store failed.
        """
        query = (query or "").strip()
        if not query:
            raise ValidationError(MSG_MISSING_QUERY)

        boletos = self.service.find_boletos(query)
        if not boletos:
            raise NotFoundError(MSG_NOT_FOUND)

        pastas = group_by_month(boletos)
        session = self.registry.open(session_id)
        with session.lock:
            session.pastas = tuple(pastas)
            session.pasta_selecionada = None
        LOG.info(
            "Session %s: %d boleto(s) in %d pasta(s)",
            session.id,
            len(boletos),
            len(pastas),
        )
        return session.id, pastas

    def select_pasta(self, index: Any, session_id: Any = None) -> tuple[str, Pasta]:
        """
        Choose a pasta from the last search by its 1-based position.

        Raises:
            SelectionError: If there was no search or the index is out of range.
        """
        session = self.registry.get(session_id)
        if session is None:
            raise SelectionError(MSG_INVALID_PASTA)
        with session.lock:
            pasta = _pick(session.pastas, index)
            if pasta is None:
                raise SelectionError(MSG_INVALID_PASTA)
            session.pasta_selecionada = pasta
        return session.id, pasta

    def select_boleto(self, index: Any, session_id: Any = None) -> tuple[str, Boleto]:
        """
        Choose a boleto from the selected pasta by its 1-based position.

        Raises:
            SelectionError: If no pasta is selected or the index is out of range.
        """
        session = self.registry.get(session_id)
        if session is None:
            raise SelectionError(MSG_INVALID_BOLETO)
        with session.lock:
            pasta = session.pasta_selecionada
            boleto = _pick(pasta.boletos if pasta else None, index)
        if boleto is None:
            raise SelectionError(MSG_INVALID_BOLETO)
        return session.id, boleto
