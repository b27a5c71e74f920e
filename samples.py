# Built-in sample games
# Five California $2-$20 games with launch and remaining prize counts,
# used by `main.py sample` and the test suite.

SAMPLE_GAMES = [
    {
        "name": "$pring Green",
        "number": "1710",
        "price": 2,
        "claimedOdds": "1 in 4.25",
        "tiers": [
            {"value": 20000, "odds": 610120, "remaining": 15, "total": 15},
            {"value": 1000, "odds": 62257, "remaining": 137, "total": 147},
            {"value": 200, "odds": 11994, "remaining": 659, "total": 763},
            {"value": 100, "odds": 1688, "remaining": 4693, "total": 5421},
            {"value": 40, "odds": 413, "remaining": 19173, "total": 22154},
            {"value": 20, "odds": 100, "remaining": 79606, "total": 91518},
            {"value": 10, "odds": 42, "remaining": 191432, "total": 219458},
            {"value": 5, "odds": 26, "remaining": 304279, "total": 347398},
            {"value": 4, "odds": 12, "remaining": 644835, "total": 733070},
            {"label": "Ticket", "value": "Ticket", "isTicket": True, "odds": 12, "remaining": 646383, "total": 732144},
        ],
   },
    {
        "name": "Cash Crush",
        "number": "1712",
        "price": 5,
        "claimedOdds": "1 in 4.53",
        "tiers": [
            {"value": 250000, "odds": 1219589, "remaining": 14, "total": 14},
            {"value": 10000, "odds": 588767, "remaining": 29, "total": 29},
            {"value": 1000, "odds": 12058, "remaining": 1325, "total": 1416},
            {"value": 500, "odds": 2607, "remaining": 5796, "total": 6550},
            {"value": 100, "odds": 400, "remaining": 38033, "total": 42729},
            {"value": 50, "odds": 200, "remaining": 76005, "total": 85381},
            {"value": 30, "odds": 150, "remaining": 101585, "total": 113808},
            {"value": 20, "odds": 40, "remaining": 380672, "total": 426856},
            {"value": 15, "odds": 27, "remaining": 572770, "total": 640358},
            {"value": 10, "odds": 15, "remaining": 1051762, "total": 1173743},
            {"value": 6, "odds": 13, "remaining": 1152384, "total": 1280568},
        ],
   },
    {
        "name": "Fireball Bingo",
        "number": "1711",
        "price": 3,
        "claimedOdds": "1 in 3.61",
        "tiers": [
            {"value": 20000, "odds": 798080, "remaining": 10, "total": 10},
            {"value": 1000, "odds": 79808, "remaining": 88, "total": 100},
            {"value": 500, "odds": 15962, "remaining": 420, "total": 500},
            {"value": 200, "odds": 7981, "remaining": 840, "total": 1000},
            {"value": 100, "odds": 2661, "remaining": 2517, "total": 3000},
            {"value": 50, "odds": 1330, "remaining": 5031, "total": 5994},
            {"value": 30, "odds": 266, "remaining": 25159, "total": 29970},
            {"value": 20, "odds": 89, "remaining": 75370, "total": 89910},
            {"value": 10, "odds": 22, "remaining": 301650, "total": 359641},
            {"value": 6, "odds": 17, "remaining": 401502, "total": 469930},
            {"label": "Ticket", "value": "Ticket", "isTicket": True, "odds": 8, "remaining": 832098, "total": 998504},
        ],
   },
    {
        "name": "$1,000,000 Money Mania",
        "number": "1713",
        "price": 10,
        "claimedOdds": "1 in 3.42",
        "tiers": [
            {"value": 1000000, "odds": 4263696, "remaining": 3, "total": 3},
            {"value": 30000, "odds": 1421232, "remaining": 9, "total": 9},
            {"value": 10000, "odds": 639554, "remaining": 19, "total": 20},
            {"value": 1000, "odds": 15540, "remaining": 756, "total": 823},
            {"value": 500, "odds": 3563, "remaining": 3120, "total": 3590},
            {"value": 200, "odds": 1425, "remaining": 7803, "total": 8975},
            {"value": 100, "odds": 238, "remaining": 46732, "total": 53850},
            {"value": 50, "odds": 68, "remaining": 163840, "total": 188476},
            {"value": 30, "odds": 34, "remaining": 328165, "total": 376951},
            {"value": 20, "odds": 17, "remaining": 658410, "total": 753903},
            {"value": 15, "odds": 10, "remaining": 1121250, "total": 1281133},
            {"label": "Ticket", "value": "Ticket", "isTicket": True, "odds": 15, "remaining": 745212, "total": 854088},
        ],
   },
    {
        "name": "Red Carpet Riches",
        "number": "1714",
        "price": 20,
        "claimedOdds": "1 in 3.27",
        "tiers": [
            {"value": 5000000, "odds": 3648260, "remaining": 3, "total": 3},
            {"value": 100000, "odds": 1216087, "remaining": 8, "total": 9},
            {"value": 10000, "odds": 608043, "remaining": 16, "total": 18},
            {"value": 2000, "odds": 18426, "remaining": 490, "total": 594},
            {"value": 1000, "odds": 8122, "remaining": 1112, "total": 1348},
            {"value": 500, "odds": 4870, "remaining": 1856, "total": 2247},
            {"value": 200, "odds": 730, "remaining": 12366, "total": 14982},
            {"value": 100, "odds": 183, "remaining": 49396, "total": 59928},
            {"value": 50, "odds": 37, "remaining": 249012, "total": 299640},
            {"value": 40, "odds": 18, "remaining": 504590, "total": 611244},
            {"value": 30, "odds": 11, "remaining": 810612, "total": 984984},
            {"label": "Ticket", "value": "Ticket", "isTicket": True, "odds": 15, "remaining": 607128, "total": 729996},
        ],
   },
]
