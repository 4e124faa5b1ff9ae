import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# ==============================================================================
# INTERFACE DU FOURNISSEUR IA
# ==============================================================================
# Aucun fournisseur réel n'est branché : 'PlaceholderAIProvider' renvoie des
# valeurs figées. Un fournisseur réel implémentera 'AIProvider' sans que les
# appelants (recherche, routes /api/ai) aient à changer.
# ==============================================================================


class AIProvider(ABC):
    """
    Contrat d'un fournisseur d'IA médicale.
    """

    @abstractmethod
    def search_enhancement(self, query: str, context: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Renvoie des groupes de suggestions pour une requête de recherche."""

    @abstractmethod
    def suggest_prescriptions(self, symptoms: List[str], patient_info: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Propose des ordonnances types à partir de symptômes."""

    @abstractmethod
    def calculate_dosage(self, request: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Calcule une posologie pour un médicament et un patient."""

    @abstractmethod
    def suggest_diseases(self, symptoms: List[str]) -> List[Dict[str, Any]]:
        """Propose des maladies compatibles avec des symptômes."""

    @abstractmethod
    def validate_prescription(self, prescription: Dict[str, Any], patient_info: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Vérifie une ordonnance (interactions, contre-indications...)."""


class PlaceholderAIProvider(AIProvider):
    """
    Fournisseur factice : aucune requête externe, réponses statiques.
    """

    def search_enhancement(self, query, context=None):
        return [
            {
                "type": "disease",
                "items": [],
                "confidence": 0.8,
                "reasoning": "Based on symptom patterns",
            },
            {
                "type": "medication",
                "items": [],
                "confidence": 0.7,
                "reasoning": "Commonly prescribed for similar conditions",
            },
        ]

    def suggest_prescriptions(self, symptoms, patient_info=None):
        return []

    def calculate_dosage(self, request):
        return {
            "recommended_dosage": "1 tablet",
            "frequency": "twice daily",
            "duration": "7 days",
            "warnings": ["Take with food", "Do not exceed recommended dose"],
            "contraindications": [],
        }

    def suggest_diseases(self, symptoms):
        return []

    def validate_prescription(self, prescription, patient_info=None):
        return {
            "is_valid": True,
            "warnings": ["Check for allergies", "Monitor for side effects"],
            "recommendations": ["Consider alternative if patient has kidney issues"],
        }


def _disabled_validation() -> Dict[str, Any]:
    return {"is_valid": True, "warnings": [], "recommendations": []}


class AIService:
    """
    Façade utilisée par l'application. Les fonctionnalités ne sont actives que
    si le drapeau est levé ET qu'une clé d'API est configurée ; sinon chaque
    méthode renvoie un résultat vide.
    """

    def __init__(self, provider: AIProvider, api_key: Optional[str] = None,
                 provider_name: str = "openai", enabled: bool = True):
        self.provider = provider
        self.api_key = api_key or ""
        self.provider_name = provider_name
        self.enabled = enabled and bool(self.api_key)

    def is_enabled(self) -> bool:
        return self.enabled

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled and bool(self.api_key)

    @staticmethod
    def enhance_query(query: str) -> str:
        return query.lower().strip()

    def search_enhancement(self, query: str, context: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        if not self.enabled:
            return None
        try:
            suggestions = self.provider.search_enhancement(query, context)
        except Exception as e:
            logger.error(f"Échec de l'enrichissement IA de la recherche : {e}")
            return None
        return {"suggestions": suggestions, "enhanced_query": self.enhance_query(query)}

    def suggest_prescriptions(self, symptoms: List[str], patient_info: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        if not self.enabled:
            return []
        try:
            return self.provider.suggest_prescriptions(symptoms, patient_info)
        except Exception as e:
            logger.error(f"Échec de la suggestion d'ordonnances : {e}")
            return []

    def calculate_dosage(self, request: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if not self.enabled:
            return None
        try:
            return self.provider.calculate_dosage(request)
        except Exception as e:
            logger.error(f"Échec du calcul de posologie : {e}")
            return None

    def suggest_diseases(self, symptoms: List[str]) -> List[Dict[str, Any]]:
        if not self.enabled:
            return []
        try:
            return self.provider.suggest_diseases(symptoms)
        except Exception as e:
            logger.error(f"Échec de la suggestion de maladies : {e}")
            return []

    def validate_prescription(self, prescription: Dict[str, Any], patient_info: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if not self.enabled:
            return _disabled_validation()
        try:
            return self.provider.validate_prescription(prescription, patient_info)
        except Exception as e:
            logger.error(f"Échec de la validation d'ordonnance : {e}")
            return _disabled_validation()


def create_ai_service(settings, enabled: bool = True, provider: Optional[AIProvider] = None) -> AIService:
    """
    Construit le service IA à partir de la configuration de l'application.
    """
    return AIService(
        provider=provider or PlaceholderAIProvider(),
        api_key=settings.AI_API_KEY,
        provider_name=settings.AI_PROVIDER,
        enabled=enabled,
    )
