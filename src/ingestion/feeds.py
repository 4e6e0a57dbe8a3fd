"""Feeds ingested by the ``rebuild`` and ``new`` commands when config.yaml lists none."""

DEFAULT_FEEDS = [
    "http://feeds.gimletmedia.com/crimetownshow",
    "http://feeds.gimletmedia.com/eltshow",
    "http://feeds.gimletmedia.com/heavyweightpodcast",
    "http://feeds.gimletmedia.com/hearstartup",
    "http://feeds.gimletmedia.com/sciencevs",
    "http://feeds.gimletmedia.com/hearreplyall",
    "http://feeds.gimletmedia.com/mogulshow",
    "http://feeds.gimletmedia.com/homecomingshow",
    "http://feeds.gimletmedia.com/storypirates",
    "http://feeds.gimletmedia.com/thenodshow",
    "http://feeds.gimletmedia.com/thepitchshow",
    "http://podcasts.files.bbci.co.uk/p05n1r2s.rss",  # Radio1 & 1Xtra Stories
    "http://podcasts.files.bbci.co.uk/p05nrmhm.rss",  # BBC Womans Hour
    "http://podcasts.files.bbci.co.uk/b006qptc.rss",  # World at 1
    "http://podcasts.files.bbci.co.uk/b00snr0w.rss",  # The Infinite Monkey Cage
    "http://podcasts.files.bbci.co.uk/b006qnx3.rss",  # The Food Programme
    "https://www.npr.org/rss/podcast.php?id=510289",  # Planet Money
    "https://www.npr.org/rss/podcast.php?id=510308",  # Hidden Brain
    "http://feed.thisamericanlife.org/talpodcast",  # This American Life
    "http://www.espn.com/espnradio/feeds/rss/podcast.xml?id=10672984",  # ESPN FC
    "http://www.espn.com/espnradio/feeds/rss/podcast.xml?id=2406595",  # Pardon The Interruption
    "http://www.espn.com/espnradio/feeds/rss/podcast.xml?id=18339885",  # The Adam Schefter Podcast
    "http://www.espn.com/espnradio/feeds/rss/podcast.xml?id=2839445",  # Around the Horn
    "http://www.espn.com/espnradio/feeds/rss/podcast.xml?id=14805210",  # Around the Rim
    "https://thefantasyfootballers.libsyn.com/fantasyfootball",  # The Fantasy Footballers
    "http://feeds.feedburner.com/freakonomicsradio",
    "http://feeds.wnyc.org/radiolab",
    "http://feeds.wnyc.org/wnycheresthething",
    "http://feeds.wnyc.org/newyorkerradiohour",
    "http://feeds.soundcloud.com/users/soundcloud:users:62921190/sounds.rss",  # a16z
    "https://rss.simplecast.com/podcasts/3408/rss",  # The Kevin Rose Show
    "https://rss.simplecast.com/podcasts/4267/rss",  # Block Zero
]
