"""
User-facing acknowledgment texts for the trip screen.

Titles group the messages by workflow, the same way the screen's dialogs
are titled.
"""

# =============================================================================
# Update trip
# =============================================================================

UPDATE_TITLE = "Atualizar viagem"

UPDATE_INCOMPLETE = (
    "Lembre-se de, além de preencher o destino, selecionar a data de "
    "início e fim da viagem."
)
UPDATE_SUCCESS = "Viagem atualizada com sucesso!"
UPDATE_FAILED = "Não foi possível atualizar a viagem."

# =============================================================================
# Confirm attendance
# =============================================================================

ATTENDANCE_TITLE = "Confirmação"

ATTENDANCE_MISSING_PARTICIPANT = "Convite inválido: participante não informado."
ATTENDANCE_MISSING_FIELDS = "Preencha nome e e-mail para confirmar a viagem!"
ATTENDANCE_INVALID_EMAIL = "E-mail inválido"
ATTENDANCE_SUCCESS = "Viagem confirmada com sucesso!"
ATTENDANCE_FAILED = "Não foi possível confirmar!"

INVITATION_TEMPLATE = (
    "Você foi convidado(a) para participar de uma viagem para {destination} "
    "nas datas de {start_day} a {end_day} de {month}."
)

# =============================================================================
# Remove trip
# =============================================================================

REMOVE_TITLE = "Remover viagem"

REMOVE_PROMPT = "Tem certeza que deseja remover a viagem?"
REMOVE_CANCELLED = "A viagem não foi removida."
REMOVE_FAILED = "Não foi possível remover a viagem."

# =============================================================================
# Load trip
# =============================================================================

LOAD_TITLE = "Viagem"

LOAD_MISSING_TRIP = "Nenhuma viagem informada."
LOAD_NOT_FOUND = "Viagem não encontrada."
LOAD_FAILED = "Não foi possível carregar a viagem."

# =============================================================================
# Generic
# =============================================================================

BUSY = "Aguarde, a operação anterior ainda está em andamento."
