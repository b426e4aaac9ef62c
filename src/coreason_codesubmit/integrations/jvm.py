# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

import asyncio
import importlib.util
import sys
from pathlib import Path

from loguru import logger

from coreason_codesubmit.exceptions import VMAlreadyInitializedError


class JPypeVM:
    """
    In-process JVM through JPype1.
    Requires the ``jvm`` extra and a local copy of the BeanShell jar.
    """

    def __init__(self, classpath: str):
        self.classpath = str(Path(classpath).resolve())

    @staticmethod
    def available() -> bool:
        return importlib.util.find_spec("jpype") is not None

    async def boot(self) -> None:
        import jpype

        if jpype.isJVMStarted():
            raise VMAlreadyInitializedError("JVM is already started")

        if not Path(self.classpath).exists():
            logger.warning(f"Classpath entry {self.classpath} does not exist")

        await asyncio.to_thread(jpype.startJVM, classpath=[self.classpath], convertStrings=True)

    async def run_main(self, main_class: str, classpath: str, *args: str) -> int:
        if str(Path(classpath).resolve()) != self.classpath:
            logger.warning(f"JVM was booted with {self.classpath}; ignoring classpath {classpath}")
        return await asyncio.to_thread(self._run_sync, main_class, list(args))

    def _run_sync(self, main_class: str, args: list[str]) -> int:
        import jpype

        System = jpype.JClass("java.lang.System")
        ByteArrayOutputStream = jpype.JClass("java.io.ByteArrayOutputStream")
        PrintStream = jpype.JClass("java.io.PrintStream")

        out_buf, err_buf = ByteArrayOutputStream(), ByteArrayOutputStream()
        original_out, original_err = System.out, System.err
        System.setOut(PrintStream(out_buf, True, "UTF-8"))
        System.setErr(PrintStream(err_buf, True, "UTF-8"))
        try:
            cls = jpype.JClass(main_class)
            if len(args) == 2 and args[0] == "-e":
                cls().eval(args[1])
            else:
                cls.main(jpype.JArray(jpype.JString)(args))
        finally:
            System.setOut(original_out)
            System.setErr(original_err)
            # Java output goes to the Python process streams, where callers capture it.
            sys.stdout.write(str(out_buf.toString("UTF-8")))
            sys.stderr.write(str(err_buf.toString("UTF-8")))
        return 0
