"""Outcome messages for consumption runs."""

from typing import Protocol

from food_inventory.config import DEFAULT_LANGUAGE
from food_inventory.domain.inventory import ConsumptionResult
from food_inventory.domain.notifications import ERROR, SUCCESS, WARNING, Notification

_MESSAGES: dict[str, dict[str, str]] = {
    "English": {
        "success_title": "Meal moved to inventory",
        "success": "Consumed from inventory: {consumed}.",
        "partial_title": "Meal moved with missing ingredients",
        "partial": "Consumed from inventory: {consumed}. Not enough in stock: "
        "{missing}.",
        "failure_title": "Ingredients not found",
        "failure": "No matching inventory for: {missing}.",
        "generic_title": "Meal moved to inventory",
        "generic": "The meal was added to your inventory.",
        "interrupted_title": "Inventory update failed",
        "interrupted": "Updating inventory failed while consuming {ingredient}. "
        "Changes made before the failure were kept.",
    },
    "Spanish": {
        "success_title": "Comida movida al inventario",
        "success": "Consumido del inventario: {consumed}.",
        "partial_title": "Comida movida con ingredientes faltantes",
        "partial": "Consumido del inventario: {consumed}. Sin existencias "
        "suficientes: {missing}.",
        "failure_title": "Ingredientes no encontrados",
        "failure": "No hay inventario para: {missing}.",
        "generic_title": "Comida movida al inventario",
        "generic": "La comida se agregó a tu inventario.",
        "interrupted_title": "Error al actualizar el inventario",
        "interrupted": "Falló la actualización al consumir {ingredient}. "
        "Los cambios anteriores se conservaron.",
    },
    "French": {
        "success_title": "Repas ajouté à l'inventaire",
        "success": "Consommé de l'inventaire : {consumed}.",
        "partial_title": "Repas ajouté avec des ingrédients manquants",
        "partial": "Consommé de l'inventaire : {consumed}. Stock insuffisant : "
        "{missing}.",
        "failure_title": "Ingrédients introuvables",
        "failure": "Aucun article correspondant pour : {missing}.",
        "generic_title": "Repas ajouté à l'inventaire",
        "generic": "Le repas a été ajouté à votre inventaire.",
        "interrupted_title": "Échec de la mise à jour",
        "interrupted": "La mise à jour a échoué pendant {ingredient}. "
        "Les modifications précédentes ont été conservées.",
    },
    "German": {
        "success_title": "Mahlzeit ins Inventar verschoben",
        "success": "Aus dem Inventar verbraucht: {consumed}.",
        "partial_title": "Mahlzeit mit fehlenden Zutaten verschoben",
        "partial": "Aus dem Inventar verbraucht: {consumed}. Nicht genug "
        "vorrätig: {missing}.",
        "failure_title": "Zutaten nicht gefunden",
        "failure": "Kein passender Vorrat für: {missing}.",
        "generic_title": "Mahlzeit ins Inventar verschoben",
        "generic": "Die Mahlzeit wurde deinem Inventar hinzugefügt.",
        "interrupted_title": "Inventar-Aktualisierung fehlgeschlagen",
        "interrupted": "Die Aktualisierung schlug bei {ingredient} fehl. "
        "Vorherige Änderungen bleiben erhalten.",
    },
    "Italian": {
        "success_title": "Pasto spostato nell'inventario",
        "success": "Consumato dall'inventario: {consumed}.",
        "partial_title": "Pasto spostato con ingredienti mancanti",
        "partial": "Consumato dall'inventario: {consumed}. Scorte insufficienti: "
        "{missing}.",
        "failure_title": "Ingredienti non trovati",
        "failure": "Nessun articolo corrispondente per: {missing}.",
        "generic_title": "Pasto spostato nell'inventario",
        "generic": "Il pasto è stato aggiunto al tuo inventario.",
        "interrupted_title": "Aggiornamento dell'inventario non riuscito",
        "interrupted": "L'aggiornamento non è riuscito durante {ingredient}. "
        "Le modifiche precedenti sono state mantenute.",
    },
    "Portuguese": {
        "success_title": "Refeição movida para o inventário",
        "success": "Consumido do inventário: {consumed}.",
        "partial_title": "Refeição movida com ingredientes em falta",
        "partial": "Consumido do inventário: {consumed}. Estoque insuficiente: "
        "{missing}.",
        "failure_title": "Ingredientes não encontrados",
        "failure": "Nenhum item correspondente para: {missing}.",
        "generic_title": "Refeição movida para o inventário",
        "generic": "A refeição foi adicionada ao seu inventário.",
        "interrupted_title": "Falha ao atualizar o inventário",
        "interrupted": "A atualização falhou ao consumir {ingredient}. "
        "As alterações anteriores foram mantidas.",
    },
}


class NotificationSink(Protocol):
    """Destination for user-facing notifications."""

    def notify(self, notification: Notification) -> None:
        """Deliver a notification."""


def build_notification(
    result: ConsumptionResult, language: str = DEFAULT_LANGUAGE
) -> Notification:
    """Map a consumption result onto one of four distinguishable outcomes."""
    consumed = ", ".join(result.consumed_items)
    missing = ", ".join(result.insufficient_items)
    if result.consumed_items and not result.insufficient_items:
        return _notification(SUCCESS, "success", language, consumed=consumed)
    if result.consumed_items:
        return _notification(
            WARNING, "partial", language, consumed=consumed, missing=missing
        )
    if result.insufficient_items:
        return _notification(ERROR, "failure", language, missing=missing)
    return _notification(SUCCESS, "generic", language)


def build_interrupted_notification(
    ingredient_name: str, language: str = DEFAULT_LANGUAGE
) -> Notification:
    """Describe a run that stopped on an inventory write failure."""
    return _notification(ERROR, "interrupted", language, ingredient=ingredient_name)


def _notification(kind: str, key: str, language: str, **params: str) -> Notification:
    messages = _MESSAGES.get(language, _MESSAGES[DEFAULT_LANGUAGE])
    return Notification(
        kind=kind,
        title=messages[f"{key}_title"],
        message=messages[key].format(**params),
    )
