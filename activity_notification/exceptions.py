class UnregisteredTargetType(LookupError):
    """Levée quand la classe d'un objet n'est pas enregistrée comme cible de notifications."""

    def __init__(self, model):
        self.model = model
        name = getattr(model, "__name__", None) or type(model).__name__
        super().__init__(
            f"{name} is not a registered notification target type. "
            f"Register it with activity_notification.targets.register({name})."
        )
