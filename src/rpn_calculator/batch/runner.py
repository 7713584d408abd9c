"""Batch evaluation of an expressions file using worker processes."""
from multiprocessing import Pipe, Process, cpu_count
from multiprocessing.connection import Connection
from pathlib import Path
from typing import Any, Dict, List, TextIO, Tuple

from pydantic import BaseModel, Field, ValidationError

from rpn_calculator.batch.worker import INTERNAL_ERROR_KIND, WorkerProcess
from rpn_calculator.common.logger import logger

INVALID_REQUEST_KIND = "InvalidRequest"


def format_payload(payload: Dict[str, Any]) -> str:
    """
    Render a worker payload as one line of the results file.

    :param dict payload: Payload sent by a worker

    :return: "<expression> = <result>" or "<expression> -> ERROR: <kind>: <message>"
    :rtype: str
    """
    if "result" in payload:
        return f"{payload['expression']} = {payload['result']}"
    return f"{payload['expression']} -> ERROR: {payload['kind']}: {payload['error']}"


class BatchEvaluator(BaseModel):
    """
    Evaluates every expression of a text file, one line per expression.

    Features:
        - Spawns one worker process per expression.
        - Writes results immediately to disk as soon as a worker finishes.
        - Ensures each worker is destroyed immediately after finishing.
        - Handles multiple simultaneous workers up to CPU core count.

    Results are written in completion order, each line repeats its expression.
    """

    output_file: Path = Field(..., description="Path to write computation results")

    @staticmethod
    def read_expressions(input_file: Path) -> List[Tuple[int, str]]:
        """
        Read the non-empty lines of an expressions file.

        :param Path input_file: Text file, one expression per line

        :return: List of (line number, expression)
        :rtype: List[Tuple[int, str]]
        """
        lines = input_file.read_text(encoding="utf-8").splitlines()
        return [(number, line.strip()) for number, line in enumerate(lines, start=1) if line.strip()]

    def _spawn_worker(self, expr: str, line_number: int) -> Tuple[Process, Connection]:
        """
        Spawn a WorkerProcess for the given expression and return process and pipe.

        :param str expr: Infix expression
        :param int line_number: Line number of expression in input

        :return: Tuple of (Process, parent_pipe)
        :rtype: Tuple[Process, Connection]
        """
        parent_conn, child_conn = Pipe()
        worker = WorkerProcess(conn=child_conn, expression=expr, line_number=line_number)
        process = Process(target=worker.run)
        process.start()
        # The child owns its end now
        child_conn.close()
        return process, parent_conn

    def _collect_finished_workers(self, active_workers: List[Tuple[Process, Connection, str]], f_out: TextIO) -> None:
        """
        Collect results from all finished workers and write them to the output file.

        Finished workers are removed from the active_workers list.

        :param list active_workers: List of tuples (Process, Pipe, expression)
        :param file f_out: Open file handle for writing results
        """
        # Iterate in reverse to safely remove finished workers while iterating
        for i in reversed(range(len(active_workers))):
            proc, pipe_conn, expr = active_workers[i]
            if pipe_conn.poll() or not proc.is_alive():
                try:
                    payload: Dict[str, Any] = pipe_conn.recv()
                except EOFError:
                    logger.error(f"👷💥 Worker {proc.pid} exited without a result for {expr!r} (exit code {proc.exitcode})")
                    payload = {"expression": expr, "kind": INTERNAL_ERROR_KIND, "error": "worker exited without a result"}
                pipe_conn.close()
                proc.join()
                active_workers.pop(i)

                f_out.write(format_payload(payload) + "\n")
                f_out.flush()

    def run(self, input_file: Path) -> int:
        """
        Evaluate every expression of input_file and write results to the output file.

        Steps:
            1. Read the non-empty lines of the input file.
            2. Spawn worker processes for each expression, respecting max CPU cores.
            3. Write results to output file immediately after worker finishes.

        :param Path input_file: Text file, one expression per line

        :return: Number of expressions processed
        :rtype: int
        """
        data = self.read_expressions(input_file)
        logger.info(f"📄 Evaluating {len(data)} expressions from {input_file}")

        with self.output_file.open("w", encoding="utf-8") as f_out:
            # Limit number of active workers to CPU cores or number of expressions
            max_workers: int = max(1, min(cpu_count(), len(data)))
            active_workers: List[Tuple[Process, Connection, str]] = []

            for line_number, expr in data:
                # Wait until a worker slot is available
                while len(active_workers) >= max_workers:
                    self._collect_finished_workers(active_workers, f_out)

                try:
                    proc, parent_conn = self._spawn_worker(expr, line_number)
                    active_workers.append((proc, parent_conn, expr))
                except ValidationError as exc:
                    logger.error(f"📄❌ Line {line_number} rejected: {exc.error_count()} validation error(s)")
                    message = exc.errors()[0]["msg"]
                    f_out.write(
                        format_payload({"expression": expr, "kind": INVALID_REQUEST_KIND, "error": message}) + "\n"
                    )
                    f_out.flush()

            # Collect remaining active workers
            while active_workers:
                self._collect_finished_workers(active_workers, f_out)

        logger.info(f"📄✅ Results written to {self.output_file}")
        return len(data)
