"""
textscope dispatch engine: validate every flag, then execute, then report.

Run phases
- loading input
  • parse the raw tokens into an Instruction.
  • input redirection: an -i/--input flag must be the only flag and must name
    an existing file; its whitespace-split words are re-parsed as the
    instruction to run. Any misuse ends the run with an engine error.
- validating
  • each flag, in position order, resolves to a command by caller then alias;
    an unknown flag is an engine error.
  • the command's validate() runs; an Err output (or any raised exception)
    is recorded, marks the operations as panicked and stops the loop.
  • otherwise the (command, flag) pair is queued for execution.
  • after the loop, a run without source text and without source file is an
    engine error.
- executing (only when nothing panicked)
  • every queued pair runs in queue order; Err outputs (or raised faults) are
    recorded and the loop goes on.
- reporting
  • every non-empty output renders as "[SUCCESS]: ..." or "[ERROR]: ...".
  • with an -o/--output destination the report is written there and the
    caller gets ""; otherwise the caller gets the report text.

Quick start
    from textscope import Engine
    from textscope.analysis import CountWords, ShowWords

    engine = Engine().add(CountWords).add(ShowWords)
    print(engine.execute(["-f", "notes.txt", "-w", "-s"]), end="")

Design notes
- The built-in identity commands (-f, -i, -o) are registered first by every
  engine and cannot be replaced: registration ignores known (caller, alias) pairs.
- One Operations instance is shared by every command of a run and discarded
  once the report is built, so an engine can be reused for another run.
"""
import importlib
import logging
from types import ModuleType

from . import files
from .commands import *
from .context import Operations
from .faults import *
from .instruction import Instruction
from .outputs import Output, Report
from .text import words

log = logging.getLogger(__name__)


class Engine:
    """
    Modular flag engine holding the commands, the outputs of the current run
    and the shared operations.

    Options
    - encoding: str (keyword-only), encoding of every file read and written.
    """

    def __init__(self, *, encoding="utf-8"):
        self.encoding = encoding
        self._commands = CommandRegistry()
        self._outputs = []
        self._operations = Operations()

        self.add(SourceFile(encoding=encoding)).add(InputFile()).add(OutputFile())

    @property
    def commands(self):
        """Registry of every command known to this engine (read it, don't mutate it)."""
        return self._commands

    def add(self, command, /):
        """
        Register a command (instance or Command subclass) and return the engine.

        Commands whose (caller, alias) pair is already known are ignored, so
        calls can be chained unconditionally.
        """
        if isinstance(command, type) and issubclass(command, Command):
            command = command()
        if not isinstance(command, Command):
            raise TypeError("add() argument must be a command or a command type")
        self._commands.register(command)
        return self

    def include(self, module, /):
        """
        Add the commands listed in a module's __commands__ attribute, in order.

        The module is given either as an imported module object or by its
        dotted name, which is imported first.

        Example
        - engine.include("textscope.analysis")
        - engine.include(plugins.vowels)
        """
        if isinstance(module, str):
            module = importlib.import_module(module)
        elif not isinstance(module, ModuleType):
            raise TypeError("include() argument must be a module or a module name")

        if (commands := getattr(module, "__commands__", None)) is None:
            raise ValueError(f"module {module.__name__!r} has no __commands__")
        for command in commands:
            self.add(command)
        return self

    def _clear(self):
        self._outputs = []
        self._operations = Operations()

    def _panic(self, output):
        log.warning("run panicked: %s", output.message)
        self._outputs.append(output)
        self._operations.panicked = True

    def _redirect(self, instruction):
        """
        Resolve -i/--input usage; return the instruction to run, or None on misuse.
        """
        if not instruction.exists(InputFile.caller, InputFile.alias):
            return instruction

        if len(instruction) != 1:
            fault = EngineError("Input file flag should be the only one!", code=FaultCode.MISPLACED_INPUT)
        elif (flag := instruction.at(0)).empty:
            fault = EngineError("Input file flag requires an argument!", code=FaultCode.MISSING_INPUT_ARGUMENT)
        elif not files.exists(flag.argument):
            fault = EngineError("Input file flag has invalid file as an argument!", code=FaultCode.INVALID_INPUT_FILE)
        else:
            try:
                content = files.read(flag.argument, encoding=self.encoding)
            except (OSError, UnicodeDecodeError):
                log.warning("can't read input file %r", flag.argument, exc_info=True)
                fault = EngineError("Input file flag has invalid file as an argument!", code=FaultCode.INVALID_INPUT_FILE)
            else:
                log.debug("redirecting input from %r", flag.argument)
                return Instruction.from_tokens(words(content))

        self._outputs.append(Output.fault(fault))
        return None

    def _validate(self, instruction):
        queue = []

        for flag in instruction:
            if (command := self._commands.find(flag.name)) is None:
                self._panic(Output.fault(EngineError(
                    f"Invalid flag: [{flag.name}]",
                    code=FaultCode.UNKNOWN_FLAG
                )))
                break

            try:
                output = command.validate(flag, instruction, self._operations)
            except CommandException as error:
                output = Output.fault(error)
            except Exception as error:
                log.exception("command %r failed to validate %r", command, flag)
                output = Output.fault(ValidationError(
                    f"Validation failed: {error}",
                    flag=flag.name,
                    code=FaultCode.DELEGATED_VALIDATION
                ))

            if output.failed:
                self._panic(output)
                break

            log.debug("validated %r with %r", flag, command)
            if not output.empty:
                self._outputs.append(output)
            queue.append((command, flag))

        if not self._operations.resolved:
            self._panic(Output.fault(EngineError("Source file is invalid!", code=FaultCode.UNRESOLVED_SOURCE)))

        return queue

    def _execute(self, queue):
        for command, flag in queue:
            try:
                output = command.execute(flag, self._operations)
            except CommandException as error:
                output = Output.fault(error)
            except Exception as error:
                log.exception("command %r failed on %r", command, flag)
                output = Output.fault(ExecutionError(
                    f"Execution failed: {error}",
                    flag=flag.name,
                    code=FaultCode.DELEGATED_ERROR
                ))

            if output.failed:
                log.warning("execution of %r failed: %s", flag.name, output.message)
            if not output.empty:
                self._outputs.append(output)

    def process(self, tokens, /):
        """
        Run one batch of tokens through every phase and return its Report.

        The engine state is reset afterwards, ready for another run.
        """
        try:
            instruction = self._redirect(Instruction.from_tokens(tokens))
            if instruction is not None:
                queue = self._validate(instruction)
                if not self._operations.panicked:
                    self._execute(queue)
            return Report(self._outputs, destination=self._operations.file_out)
        finally:
            self._clear()

    def deliver(self, report, /):
        """
        Write the report to its destination and return "", or return its text
        when it has no destination.
        """
        if not report.destination:
            return report.render()
        try:
            files.write(report.destination, report.render(), encoding=self.encoding)
        except OSError:
            log.error("can't write report to %r", report.destination, exc_info=True)
            fault = EngineError("Output file can't be written!", code=FaultCode.UNWRITABLE_OUTPUT)
            return Report((*report, Output.fault(fault))).render()
        return ""

    def execute(self, tokens, /):
        """
        Parse, validate, execute and report one batch of tokens.

        Returns the report text, or "" when it was written to an output file.
        """
        return self.deliver(self.process(tokens))

    def __repr__(self):
        return f"engine({len(self._commands)} commands, encoding={self.encoding!r})"


__all__ = (
    "Engine",
)
