"""Gradient preview service.

Usage
-----
$ pip install -e .
$ python main.py                # starts on http://127.0.0.1:5000

  /           synth background preview
  /gradient   ?hue=220&stops=7&seed=42&mode=side-bright&kind=linear&angle=45
  /dock       ?count=6&active=2&hue=215
"""

from synth_gradients.app import create_app

if __name__ == "__main__":
    # Production: debug=False; threaded=True is fine, every request is pure math.
    create_app().run(debug=False, threaded=True)
