from .system import GUARD_PROMPT, SYSTEM_PROMPT, build_system_prompt
