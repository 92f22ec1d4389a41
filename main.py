from rich.console import Console
from rich.pretty import pprint

from argbind import *

console = Console(stderr=True)


if __name__ == '__main__':
    verbose, threads, ratio, file = Ref(False), Ref(1), Ref(1.0), Ref("")

    parser = ArgumentParser("main", "argbind demo")
    parser.add_flag("-d", verbose)
    parser.add_option("--threads", threads)
    parser.add_option("--ratio", ratio)
    parser.add_positional("file", file, str)

    if not (outcome := parser.parse_args()):
        console.print(outcome.fault)
        raise SystemExit(1)

    pprint(parser)
    pprint({"debug": verbose.value, "threads": threads.value, "ratio": ratio.value, "file": file.value})
