class AssessmentError(Exception):
    """Base for recoverable validation failures raised by the assessment core."""

    code = "ASSESSMENT_ERROR"
    status_code = 400


class UnknownTopic(AssessmentError):
    code = "UNKNOWN_TOPIC"
    status_code = 404

    def __init__(self, topic_id: str):
        super().__init__(f"Unknown topic: {topic_id!r}")
        self.topic_id = topic_id


class UnknownModule(AssessmentError):
    code = "UNKNOWN_MODULE"
    status_code = 500

    def __init__(self, module_id: str):
        super().__init__(f"Unknown therapy module: {module_id!r}")
        self.module_id = module_id


class EmptyAnswer(AssessmentError):
    code = "EMPTY_ANSWER"
    status_code = 422

    def __init__(self):
        super().__init__("Please provide an answer before continuing")


class AtStart(AssessmentError):
    code = "AT_START"
    status_code = 409

    def __init__(self):
        super().__init__("Already at the first question")


class InvalidState(AssessmentError):
    code = "INVALID_STATE"
    status_code = 409


class NoScaleData(AssessmentError):
    code = "NO_SCALE_DATA"
    status_code = 422

    def __init__(self, topic_id: str):
        super().__init__(f"Topic {topic_id!r} has no scaling questions to score")
        self.topic_id = topic_id


class CatalogError(ValueError):
    """Raised while loading a malformed topic or rule file."""
