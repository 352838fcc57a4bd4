"""Static HTML served by the upload handler."""

UPLOAD_FORM_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <title>Simple Image Resizer</title>
  <style>
    body { font-family: Arial, sans-serif; margin: 2em; }
    form { margin-bottom: 2em; }
    .upload-section { margin-bottom: 1em; }
    button { padding: 0.5em 1em; cursor: pointer; }
  </style>
</head>
<body>
  <h1>Upload and Resize Image</h1>
  <form action="/upload" method="POST" enctype="multipart/form-data">
    <div class="upload-section">
      <label for="image">Choose an image to upload:</label><br />
      <input type="file" name="image" id="image" accept="image/*" required />
    </div>
    <button type="submit">Upload &amp; Resize</button>
  </form>
</body>
</html>
"""

SUCCESS_HTML = """
<h2>Success!</h2>
<p>Your image was resized and posted to your X/Twitter account (check logs for details).</p>
<a href="/">Go Back</a>
"""

INTERNAL_ERROR_MESSAGE = "An internal error occurred."
