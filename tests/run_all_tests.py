"""
Run every tests/test_*.py module as a script.

Each module prints its own PASSED lines when run directly; this runner
starts them one after the other with the project root on PYTHONPATH,
then prints one status line per module. pytest collects the same
modules directly.

Usage:
    python tests/run_all_tests.py [name-filter]

Author: Carmen Esteban
"""

import glob
import os
import subprocess
import sys
import time

TIMEOUT = 600


def module_env(project_root):
    env = dict(os.environ)
    parts = [project_root]
    if env.get("PYTHONPATH"):
        parts.append(env["PYTHONPATH"])
    env["PYTHONPATH"] = os.pathsep.join(parts)
    return env


def run_module(path, env):
    """Return (status, seconds, output) for one test module."""
    t0 = time.time()
    try:
        proc = subprocess.run([sys.executable, path], env=env,
                              capture_output=True, text=True, timeout=TIMEOUT)
    except subprocess.TimeoutExpired:
        return "TIMEOUT", time.time() - t0, ""
    status = "ok" if proc.returncode == 0 else "FAIL"
    return status, time.time() - t0, proc.stdout + proc.stderr


def main(argv):
    tests_dir = os.path.dirname(os.path.abspath(__file__))
    env = module_env(os.path.dirname(tests_dir))
    pattern = argv[1] if len(argv) > 1 else ""
    paths = [p for p in sorted(glob.glob(os.path.join(tests_dir, "test_*.py")))
             if pattern in os.path.basename(p)]

    statuses = []
    for path in paths:
        name = os.path.basename(path)
        status, seconds, output = run_module(path, env)
        statuses.append(status)
        print("{:<22} {:<8} {:6.1f}s".format(name, status, seconds))
        if status != "ok":
            print(output.rstrip())

    failed = len(statuses) - statuses.count("ok")
    print("{} modules, {} failed".format(len(statuses), failed))
    return 1 if failed or not statuses else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
