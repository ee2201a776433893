from enum import Enum


class ReorderState(str, Enum):
    IDLE = "idle"               # Nenhum arraste em andamento
    DRAGGING = "dragging"       # Item sendo arrastado
    REORDERED = "reordered"     # Nova ordem aplicada localmente
    RECONCILING = "reconciling" # Aguardando confirmação do servidor
    CONFIRMED = "confirmed"     # Servidor aceitou as sequências
    ROLLED_BACK = "rolled_back" # Falhou, ordem anterior restaurada
