from afrisight.genai.gateway import GenerativeTextGateway

__all__ = ["GenerativeTextGateway"]
