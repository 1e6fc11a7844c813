"""
Commandes envoyées à l'API par la session d'édition.

Chaque appel distant est décrit par une `Command` (opération, payload,
callback de fin) puis confié à un dispatcher. La session ne parle jamais
directement au réseau, ce qui permet de compter et d'ordonner les requêtes
dans les tests.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional
import logging

from notecanvas.editor.errors import ApiError

logger = logging.getLogger(__name__)

# callback(result, error): exactement un des deux est renseigné
Completion = Callable[[Any, Optional[ApiError]], None]


@dataclass
class Command:
    operation: str  # nom d'une méthode du client: "get_page", "update_block", ...
    payload: dict = field(default_factory=dict)
    on_complete: Optional[Completion] = None


class Dispatcher:
    """Exécute les commandes contre le client de l'API"""

    def __init__(self, api):
        self.api = api
        self.sent: List[Command] = []

    def dispatch(self, command: Command) -> None:
        raise NotImplementedError

    def execute(self, command: Command) -> None:
        self.sent.append(command)
        try:
            result = getattr(self.api, command.operation)(**command.payload)
        except ApiError as e:
            logger.debug(f"{command.operation} failed: {e}")
            if command.on_complete:
                command.on_complete(None, e)
            return
        if command.on_complete:
            command.on_complete(result, None)

    def count(self, operation: str) -> int:
        return sum(1 for c in self.sent if c.operation == operation)


class ImmediateDispatcher(Dispatcher):
    """Envoie chaque commande tout de suite"""

    def dispatch(self, command: Command) -> None:
        self.execute(command)


class QueuedDispatcher(Dispatcher):
    """
    Garde les commandes en attente jusqu'à `flush()`.

    Modélise l'attente d'une réponse réseau: entre `dispatch` et `flush`,
    l'état local a déjà été modifié mais la requête n'est pas partie.
    """

    def __init__(self, api):
        super().__init__(api)
        self.pending: List[Command] = []

    def dispatch(self, command: Command) -> None:
        self.pending.append(command)

    def flush(self) -> int:
        done = 0
        # une commande peut en déclencher d'autres (ex: rechargement après échec)
        while self.pending:
            self.execute(self.pending.pop(0))
            done += 1
        return done
