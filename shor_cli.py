import sys, argparse, logging, time
from shorsim import shors_algorithm, is_probable_prime, random_base_supplier, FactoringFailure
from shorsim import config

def process(n: int, args) -> int:
    if n < 4:
        print(f"{n}: please enter a composite number greater than 3."); return 1
    if is_probable_prime(n):
        print(f"{n}: is prime, nothing to factor."); return 1
    print(f"Attempting to factor N = {n}")
    t0 = time.perf_counter()
    try:
        res = shors_algorithm(
            n,
            max_attempts=args.max_attempts,
            base_supplier=random_base_supplier(args.seed),
            period_limit=args.period_limit or None,
        )
    except FactoringFailure as e:
        print(f"\nFailed to find factors ({e}). Try a larger --max-attempts or --period-limit.")
        print(f"Computation took: {time.perf_counter() - t0:.6f}s")
        return 1
    dt = time.perf_counter() - t0
    if args.verbose:
        for s in res.steps:
            print("  -", s)
    print(f"\nFactors found: {res.p} and {res.q}")
    print(f"Verification: {res.p} * {res.q} = {res.p * res.q}")
    print(f"Computation took: {dt:.6f}s")
    return 0

def main(argv=None):
    ap = argparse.ArgumentParser(description="Factor N with Shor's algorithm (classical period finding).")
    ap.add_argument("--max-attempts", type=int, default=config.MAX_ATTEMPTS, help="bases to try before giving up")
    ap.add_argument("--period-limit", type=int, default=config.PERIOD_LIMIT, help="cap on the period scan (0 = N)")
    ap.add_argument("--seed", default=config.SEED, help="seed for base selection")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="-v steps, -vv debug log")
    ap.add_argument("N", nargs="*", type=int, help="integers to factor; read from stdin when omitted")
    args = ap.parse_args(argv)

    level = logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s", stream=sys.stderr)

    rc = 0
    if args.N:
        for n in args.N:
            rc |= process(n, args)
    else:
        if sys.stdin.isatty():
            print("Enter the number (N) to factor:")
        for line in sys.stdin:
            line = line.strip()
            if not line: continue
            try: n = int(line, 10)
            except ValueError:
                print(f"# skip: {line}", file=sys.stderr); rc |= 1; continue
            rc |= process(n, args)
    raise SystemExit(rc)

if __name__ == "__main__":
    main()
