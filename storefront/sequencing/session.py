import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set

from storefront.configuration.settings import Configuration
from storefront.core.exceptions.errors import NotAuthenticatedError, ReorderRejectedError
from storefront.enums.reorder_state import ReorderState
from storefront.schemas.product import ProductRead
from storefront.sequencing.client import ReorderClient
from storefront.sequencing.reorder import assign_sequences, build_payload, move_item

configuration = Configuration()

RELOGIN_MESSAGE = "Please log in again to continue."


@dataclass
class ReorderOutcome:
    state: ReorderState
    items: List[ProductRead]
    generation: int
    message: Optional[str] = None
    redirect_to: Optional[str] = None
    stale: bool = False


class ReorderSession:
    """
    Reordenação otimista da lista de produtos do admin.

    Cada soltura gera uma nova geração com a ordem tentativa resultante.
    A geração 0 é a ordem recebida do servidor. Num rollback, a tela volta
    para a ordem mais recente que não falhou e não é anterior à última
    confirmada; respostas que não dizem respeito à ordem exibida não mexem nela.
    """

    def __init__(
        self,
        items: List[ProductRead],
        client: ReorderClient,
        login_path: Optional[str] = None,
        notify: Optional[Callable[[str], None]] = None,
    ):
        self.items: List[ProductRead] = list(items)
        self.client = client
        self.login_path = login_path or configuration.login_path
        self.notify = notify or (lambda message: logging.warning(f"REORDENAÇÃO >>> {message}"))
        self.state = ReorderState.IDLE
        self.generation = 0
        self._orders: Dict[int, List[ProductRead]] = {0: list(self.items)}
        self._failed: Set[int] = set()
        self._confirmed = 0
        self._displayed = 0

    @property
    def confirmed_items(self) -> List[ProductRead]:
        return list(self._orders[self._confirmed])

    def start_drag(self) -> None:
        self.state = ReorderState.DRAGGING

    def cancel_drag(self) -> None:
        self.state = ReorderState.IDLE

    def apply(self, source_index: int, destination_index: int) -> int:
        """Fase 1: aplica a nova ordem localmente."""
        reordered = assign_sequences(move_item(self.items, source_index, destination_index))

        self.generation += 1
        self._orders[self.generation] = reordered
        self._displayed = self.generation
        self.items = list(reordered)
        self.state = ReorderState.REORDERED
        return self.generation

    def confirm(self, generation: int) -> bool:
        if generation in self._orders and generation > self._confirmed:
            self._confirmed = generation
            # Ordens anteriores à confirmada não servem mais de destino de rollback
            for old in [g for g in self._orders if g < generation]:
                del self._orders[old]
            self._failed = {g for g in self._failed if g > generation}

        if generation != self._displayed:
            logging.info(f"REORDENAÇÃO >>> Confirmação da geração {generation} ignorada (exibida: {self._displayed})")
            return False
        self.state = ReorderState.CONFIRMED
        return True

    def rollback(self, generation: int) -> bool:
        if generation > self._confirmed:
            self._failed.add(generation)

        if generation != self._displayed:
            logging.info(f"REORDENAÇÃO >>> Rollback da geração {generation} ignorado (exibida: {self._displayed})")
            return False

        fallback = max(g for g in self._orders if g not in self._failed and g >= self._confirmed)
        self._displayed = fallback
        self.items = list(self._orders[fallback])
        self.state = ReorderState.ROLLED_BACK
        return True

    async def drop(self, source_index: int, destination_index: Optional[int]) -> ReorderOutcome:
        if destination_index is None:
            self.cancel_drag()
            return ReorderOutcome(state=self.state, items=self.items, generation=self.generation)

        generation = self.apply(source_index, destination_index)
        payload = build_payload(self.items)
        self.state = ReorderState.RECONCILING

        try:
            await self.client.send(payload)
        except NotAuthenticatedError:
            applied = self.rollback(generation)
            self.notify(RELOGIN_MESSAGE)
            return ReorderOutcome(
                state=self.state,
                items=self.items,
                generation=generation,
                message=RELOGIN_MESSAGE,
                redirect_to=self.login_path,
                stale=not applied,
            )
        except ReorderRejectedError as e:
            applied = self.rollback(generation)
            message = str(e)
            logging.error(f"REORDENAÇÃO >>> Erro ao atualizar sequência: {message}")
            self.notify(message)
            return ReorderOutcome(
                state=self.state,
                items=self.items,
                generation=generation,
                message=message,
                stale=not applied,
            )

        applied = self.confirm(generation)
        return ReorderOutcome(state=self.state, items=self.items, generation=generation, stale=not applied)
