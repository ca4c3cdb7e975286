"""Tranquil decision services.

Each service wraps pure decision functions with a thin Flask adapter:
- Safety Service: escalation gate for chat turns (explicit crisis language first)
- Environment Service: platform profile and identity flow per session
- Speech Service: voice selection and speech-input strategy
"""
