# ------------ WindowsAutoSwitch -----------------------
# Run with "python WindowsAutoSwitch.py" (or "pythonw" for no console window).
# All settings can be passed as options, see "python WindowsAutoSwitch.py --help".
from autoswitch.cli import main

if __name__ == "__main__":
    main(prog_name="WindowsAutoSwitch")
