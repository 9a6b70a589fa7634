import functools
import time
import seaborn as sns
import matplotlib.pyplot as plt
import numpy as np

class FunctionProfiler:
    '''Collects wall-clock timings of named calls, e.g. tree build and query phases'''
    def __init__(self):
        self.profiles = {}

    def profile(self, name):
        def decorator(func):
            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                start_time = time.perf_counter()
                try:
                    return func(*args, **kwargs)
                finally:
                    self.record(name, time.perf_counter() - start_time)

            return wrapper

        return decorator

    def record(self, name, elapsed_time):
        self.profiles.setdefault(name, []).append(elapsed_time)

    def total(self, name):
        return float(np.sum(self.profiles.get(name, [])))

    def summary(self):
        print("=====================================")
        print("Timings")
        for name, times in self.profiles.items():
            data = np.array(times)
            print(f"{name}: {len(data)} call(s), total {data.sum():.6f}s, mean {data.mean():.6f}s")
        print("=====================================")

    def plot(self, name):
        if name not in self.profiles:
            print(f"No data found for function '{name}'")
            return

        plt.figure(figsize=(8, 6))
        plt.title(f"Kernel Density Plot for '{name}'")
        plt.xlabel("Execution Time (seconds)")
        plt.ylabel("Density")

        data = np.array(self.profiles[name])
        sns.kdeplot(data, color='b', fill=True)
        plt.show()
