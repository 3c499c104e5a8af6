"""HTML markup rendered into the ticket image.

Placeholders: name, username, avatar_url, ticket_code, event_title,
event_tag, event_when, event_location, site_url. Values must be HTML-escaped
before substitution.
"""
from string import Template

TICKET_BACKGROUND_URL = "https://res.cloudinary.com/devtenotea/image/upload/v1704844290/w1iauqry6je7y0mdpt2j.png"
HOST_LOGO_URL = "https://res.cloudinary.com/devtenotea/image/upload/v1704803542/i9wf4gyqocpdisekdv62.png"
PARTNER_LOGO_URL = "https://res.cloudinary.com/devtenotea/image/upload/v1704839313/ahamzdchjddvimjormus.png"

TICKET_HTML = Template("""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <link rel="preconnect" href="https://fonts.googleapis.com">
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
    <link href="https://fonts.googleapis.com/css2?family=Inter:wght@100;200;300;400;500;600;700;800;900&display=swap" rel="stylesheet">
    <title>Launch Party Ticket</title>
    <style>
      html, body { height: 400px; }
      * {
        margin: 0;
        padding: 0;
        box-sizing: border-box;
        color: white;
        font-family: "Inter", system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI",
          Roboto, Oxygen, Ubuntu, Cantarell, "Open Sans", "Helvetica Neue", sans-serif;
      }
      .ticket-container {
        background-color: black;
        height: 400px;
        position: relative;
        width: 100%;
        z-index: 1;
        overflow: hidden;
        border-left: 8px solid #f2b311;
        display: flex;
      }
      .ticket-container::before {
        position: absolute;
        left: 1px;
        top: 0;
        height: 100%;
        width: 100%;
        content: "";
        border-left: 7px dashed #60126c;
      }
      .event-body { flex-grow: 1; padding: 30px 80px; }
      .specifics { margin-top: 70px; color: #f2b311; }
      .specifics div { display: flex; justify-content: space-between; max-width: 800px; color: inherit; }
      .specifics p { color: inherit; display: flex; align-items: center; gap: 8px; }
      .ticket-bg {
        width: 100%;
        height: 100%;
        top: 0;
        left: 0;
        object-fit: cover;
        position: absolute;
        z-index: -1;
      }
      .logos-partners { display: flex; align-items: center; gap: 20px; }
      .logos-partners img:first-child { height: 24px; }
      .logos-partners img:last-child { height: 56px; }
      .logos-partners span { color: #787878; font-size: 18px; }
      .title { font-size: 64px; margin-top: 54px; white-space: nowrap; color: #f2b311; }
      .tag {
        border: 2px solid #60126c;
        border-radius: 1000px;
        color: #f2b311;
        font-weight: 700;
        text-transform: uppercase;
        padding: 10px 25px;
        font-size: 14px;
        background-color: #1d0221;
        margin-top: 20px;
        max-width: max-content;
      }
      .attendee {
        padding: 40px 60px;
        width: 400px;
        flex-shrink: 0;
        border-left: 2px dashed rgba(255, 255, 255, 0.17);
      }
      .attendee img {
        border: 6px solid #f2b311;
        border-radius: 10000px;
        object-fit: cover;
        width: 160px;
        height: 160px;
      }
      .attendee h2 { font-size: 32px; margin-top: 24px; }
      .attendee p { font-style: oblique; color: #398f96; font-size: 18px; margin-top: 2px; }
      .attendee a { color: #f2b311; display: block; max-width: max-content; margin-top: 60px; }
      .ticket-number {
        display: flex;
        align-items: center;
        justify-content: center;
        background-color: black;
        width: 100px;
      }
      .ticket-number .code {
        font-weight: 700;
        font-size: 50px;
        white-space: nowrap;
        transform: rotate(90deg);
      }
    </style>
  </head>
  <body>
    <section class="ticket-container">
      <img src="${background_url}" class="ticket-bg" />
      <div class="event-body">
        <div class="logos-partners">
          <img src="${host_logo_url}" />
          <span>&times;</span>
          <img src="${partner_logo_url}" alt="" />
        </div>
        <h1 class="title">${event_title}</h1>
        <p class="tag">${event_tag}</p>
        <div class="specifics">
          <div>
            <p>&#128197; ${event_when}</p>
            <p>&#128205; ${event_location}</p>
          </div>
        </div>
      </div>
      <div class="attendee">
        <img src="${avatar_url}" alt="" />
        <h2>${name} &#10004;</h2>
        <p>@${username}</p>
        <a href="${site_url}">${site_url}</a>
      </div>
      <div class="ticket-number">
        <p class="code">${ticket_code}</p>
      </div>
    </section>
  </body>
</html>
""")
