from noteboard.models.note import Note
from noteboard.models.script import Script, ScriptExecution, ScriptVariable
from noteboard.models.secret import Secret
from noteboard.models.task import Subtask, Task

__all__ = ["Note", "Script", "ScriptExecution", "ScriptVariable", "Secret", "Subtask", "Task"]
