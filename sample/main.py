"""
Generates the accessor for SamplePreferences and drives it.

Run from this directory:

    python main.py
"""

import asyncio
import importlib
import sys
from pathlib import Path

from sharedpreform import generate_accessors
from sharedpreform.logging_config import configure_logging
from sharedpreform.store import StoreProvider

from memory_store import MemoryStoreProvider
from sample_preferences import SamplePreferences

SAMPLE_DIR = Path(__file__).parent


def generate(output_dir):
    result = generate_accessors(
        [SamplePreferences],
        language="python",
        config={"package_name": "generated"},
        output_dir=output_dir,
    )
    if not result.success:
        for error in result.errors:
            print(error, file=sys.stderr)
        sys.exit(1)
    return result.artifacts[0]


async def use_async(prefs):
    await prefs.setUsernameAsync("Ada Lovelace")
    await prefs.setAgeAsync(36)
    await prefs.setHeightAsync(1.65)
    await prefs.setIsLoggedInAsync(False)
    await prefs.setUserSetAsync({"Mathematician"})

    print(f"Async Username: {await prefs.getUsernameAsync()}")
    print(f"Async Age: {await prefs.getAgeAsync()}")
    print(f"Async Height: {await prefs.getHeightAsync()}")
    print(f"Async Is Logged In: {await prefs.getIsLoggedInAsync()}")
    print(f"Async User Set: {await prefs.getUserSetAsync()}")


def main(output_dir=SAMPLE_DIR):
    configure_logging()
    artifact = generate(output_dir)
    print(f"Generated {artifact.class_name} at {artifact.location}")

    if str(output_dir) not in sys.path:
        sys.path.insert(0, str(output_dir))
    module_name = ".".join(Path(artifact.path).with_suffix("").parts)
    module = importlib.import_module(module_name)
    accessor_class = getattr(module, artifact.class_name)

    provider: StoreProvider = MemoryStoreProvider()
    prefs = accessor_class(provider)

    print(f"Username before: {prefs.getUsername()}")
    prefs.setUsername("Grace Hopper")
    prefs.setAge(85)
    prefs.setHeight(1.6)
    prefs.setIsLoggedIn(True)
    prefs.setUserSet({"Developer", "Admiral"})

    print(f"Username: {prefs.getUsername()}")
    print(f"Age: {prefs.getAge()}")
    print(f"Height: {prefs.getHeight()}")
    print(f"Is Logged In: {prefs.getIsLoggedIn()}")
    print(f"User Set: {sorted(prefs.getUserSet())}")

    asyncio.run(use_async(prefs))


if __name__ == "__main__":
    main()
