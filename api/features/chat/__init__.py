"""Chat feature package: entities, repository, service, controller, router.

Stores conversations and their inbound/outbound messages and produces
assistant replies through the provider gateway in ``llm.gateway``.
"""
