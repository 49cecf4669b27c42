from protogen.llm.client import Completion, GenAIClient, get_llm_client, run_with_timeout

__all__ = ["Completion", "GenAIClient", "get_llm_client", "run_with_timeout"]
