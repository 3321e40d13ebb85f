# readlater

A small self-hosted web service for saving things to read later and
reading them in any RSS reader.

Each feed is one of two kinds (`readlater.models.FeedType`):

- **url** feeds hold links. When you save a link, the page is fetched
  (following at most three redirects) and its `og:title` or `<title>`,
  and its `og:description` or `description` meta tag, fill in the RSS
  item, together with any note you add. A link without `http://` or
  `https://` gets `http://` put in front. Each page is fetched once per
  running server and then cached.
- **text** feeds hold pieces of text. Each sentence gets a struck-out
  translation next to it, produced by running the program
  `translator/trans` in the working directory. If the number of
  translated sentences does not match, the whole translation is added
  after the text instead. If the program cannot be run or fails, the
  text is kept as it is and a note says `Translator unreachable.`

Items are stored in a SQLite database, `ReadLaterRSS.db`, in the working
directory. On first start the database is created with one feed of the
url kind, named `Default`.

Deleted items are kept as `[deleted]` placeholders and are not removed.
RSS readers cannot tell a removed item from one that is only old, so
keeping a placeholder is the only reliable way to mark it gone.

## Installing

```
pip install .
```

## Running

```
readlater --listen 8080 --website http://example.com
```

`-l` and `-s` are short forms of `--listen` and `--website`; both must be
given, in that order. With any other arguments, or a port outside
0–65535, the command prints a usage line and exits. The server listens
on every interface at the given port and prints the IPv4 addresses it
can be reached at. The website address is the public root URL the feed's
`<link>` points to (`<website>/rss`).

## Pages

| Path       | What it does                                                  |
|------------|---------------------------------------------------------------|
| `/`        | Start page; any unknown path shows it too                     |
| `/save`    | Form to save a link or a text, depending on the feed; POST saves |
| `/explore` | List of saved items; `?delete=<id>` marks one deleted         |
| `/rss`     | The selected feed as RSS 2.0                                  |
| `/feeds`   | Table of all feeds                                            |

The feed is picked with the `feed` query parameter, or else the `feed`
cookie. If neither is given, the first feed is used. When a request
fails, for example because the named feed does not exist, the error
message is sent back as plain text.

## Using it as a library

- `readlater.handler.Handler(root_url, history)` is a WSGI application,
  so any WSGI server can host it.
- `readlater.storage.History(path)` gives direct access to the stored
  feeds and items (`add_feed`, `delete_feed`, `get_feed`, `get_feeds`,
  `add_item`, `delete_item`, `get_items`) and can be used as a context
  manager. `open_database` and `migrate` create or check the schema.
- `readlater.rss.RssFeed` and `RssItem` build RSS 2.0 documents with
  `RssFeed.to_rss()`.
- `readlater.pipes.UrlToRssPipe` and `TextToRssPipe` turn stored items
  into RSS items; `readlater.pipes.scrape` fetches a page's preview.

## What it does not do

- There is no page for creating, editing or removing feeds. New feeds
  are added with `History.add_feed`, and removed with
  `History.delete_feed`.
- The pages are plain, built-in HTML with no stylesheets or templates.
- The bundled server is the standard library's single-threaded WSGI
  server; for anything beyond personal use, host `Handler` with another
  WSGI server.