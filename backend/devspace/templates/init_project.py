ENTRY_FILE = "index.html"
STYLESHEET_FILE = "style.css"
SCRIPT_FILE = "app.js"

BASELINE_FILES: dict[str, str] = {
    ENTRY_FILE: """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>DevSpace App</title>
    <link rel="stylesheet" href="style.css" />
  </head>
  <body>
    <h1>Hello, DevSpace!</h1>
    <p>Edit the files and press Run.</p>
    <script src="app.js"></script>
  </body>
</html>""",
    STYLESHEET_FILE: """:root{--bg:#0b0e16;--fg:#e6e6e6;--muted:#8e8e93;--accent:#0a84ff}
html,body{margin:0;padding:0;background:var(--bg);color:var(--fg);font-family:ui-sans-serif,system-ui,Segoe UI,Roboto}
h1{font-weight:700}
p{color:var(--muted)}""",
    SCRIPT_FILE: """console.log('DevSpace ready');
const p=document.createElement('p');
p.textContent='JS connected';
document.body.appendChild(p);""",
}
